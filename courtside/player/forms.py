"""Forms for the player blueprint."""

from wtforms import StringField
from wtforms.validators import DataRequired

from courtside.forms import ApiForm


class ToggleActiveForm(ApiForm):
    target_user_id = StringField("Target User", validators=[DataRequired()])
