"""Forms for the match blueprint."""

from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, InputRequired, NumberRange

from courtside.forms import ApiForm, ScoreListField, StringListField


class CreateMatchForm(ApiForm):
    """Form for placing confirmed players on a court slot."""

    event_id = StringField("Event", validators=[DataRequired()])
    court_id = StringField("Court", validators=[DataRequired()])
    match_number = IntegerField(
        "Match Number", validators=[InputRequired(), NumberRange(min=1)]
    )
    player_ids = StringListField("Players", validators=[DataRequired()])


class RecordScoreForm(ApiForm):
    """Form for recording the result of a match."""

    scores = ScoreListField("Scores", validators=[DataRequired()])
    winner_id = StringField("Winner", validators=[DataRequired()])
