"""Base form and custom fields for JSON request bodies."""

from flask_wtf import FlaskForm
from wtforms import Field
from wtforms.validators import ValidationError as FieldValidationError

from .errors import ValidationError


class ApiForm(FlaskForm):
    """A form populated from the JSON body of a request.

    CSRF is enforced per request in the app factory, not per form.
    """

    class Meta:
        csrf = False

    def first_error(self):
        """Return the first field error as a readable message."""
        for name, errors in self.errors.items():
            if errors:
                label = self[name].label.text if name in self else name
                return f"{label}: {errors[0]}"
        return "Validation failed."

    def validate_or_raise(self):
        """Validate the submitted body or raise ``ValidationError``."""
        if not self.validate_on_submit():
            raise ValidationError(self.first_error())
        return self


class StringListField(Field):
    """A JSON array of strings, e.g. a list of profile ids."""

    def process_formdata(self, valuelist):
        self.data = [str(v) for v in valuelist]

    def _value(self):
        return ",".join(self.data or [])


class ScoreListField(Field):
    """A JSON array of set scores: ``{set, player1Score, player2Score}``."""

    keys = ("set", "player1Score", "player2Score")

    def process_formdata(self, valuelist):
        self.data = list(valuelist)

    def pre_validate(self, form):
        scores = []
        for entry in self.data or []:
            if not isinstance(entry, dict) or any(k not in entry for k in self.keys):
                raise FieldValidationError(
                    "Each score needs set, player1Score and player2Score."
                )
            try:
                score = {k: int(entry[k]) for k in self.keys}
            except (TypeError, ValueError) as e:
                raise FieldValidationError("Scores must be whole numbers.") from e
            if any(v < 0 for v in score.values()):
                raise FieldValidationError("Scores cannot be negative.")
            scores.append(score)
        self.data = scores
