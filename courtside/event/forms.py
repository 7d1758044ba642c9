"""Forms for the event blueprint."""

from wtforms import DateField, IntegerField, SelectField, StringField
from wtforms.validators import DataRequired, InputRequired, NumberRange, Regexp
from wtforms.validators import ValidationError as FieldValidationError

from courtside.core.constants import COURT_CAPACITIES
from courtside.core.types import SurfaceType, choices_for
from courtside.forms import ApiForm
from courtside.utils import parse_deadline


class EventForm(ApiForm):
    """Form for creating an event."""

    name = StringField("Event Name", validators=[DataRequired()])
    date = DateField("Date", validators=[DataRequired()])
    location = StringField("Location", validators=[DataRequired()])
    start_time = StringField(
        "Start Time",
        validators=[
            DataRequired(),
            Regexp(r"^([01]\d|2[0-3]):[0-5]\d$", message="Use HH:MM."),
        ],
    )
    courts_reserved = IntegerField(
        "Courts Reserved", validators=[InputRequired(), NumberRange(min=1)]
    )
    matches_per_court = IntegerField(
        "Matches Per Court", validators=[InputRequired(), NumberRange(min=1)]
    )
    matchmaker_id = StringField("Matchmaker", validators=[DataRequired()])
    invite_deadline = StringField("Invite Deadline", validators=[DataRequired()])

    def validate_invite_deadline(self, field):
        try:
            field.parsed = parse_deadline(field.data)
        except ValueError as e:
            raise FieldValidationError("Use an ISO date or date-time.") from e


class CourtForm(ApiForm):
    """Form for adding a court to an event in setup."""

    court_number = IntegerField(
        "Court Number", validators=[InputRequired(), NumberRange(min=1)]
    )
    label = StringField("Label", validators=[DataRequired()])
    surface_type = SelectField(
        "Surface", choices=choices_for(SurfaceType), validators=[DataRequired()]
    )
    capacity = SelectField(
        "Capacity",
        choices=[(c, str(c)) for c in COURT_CAPACITIES],
        coerce=int,
        validators=[InputRequired()],
    )


class InvitePlayerForm(ApiForm):
    """Form for inviting a player to an event."""

    player_id = StringField("Player", validators=[DataRequired()])
