"""Forms for the profile blueprint."""

from wtforms import SelectField, StringField
from wtforms.validators import DataRequired, Length, Optional

from courtside.core.types import Role, SkillLevel, choices_for
from courtside.forms import ApiForm


class CreateProfileForm(ApiForm):
    """Form for the self-service profile created on first login."""

    first_name = StringField(
        "First Name", validators=[DataRequired(), Length(min=1, max=50)]
    )
    last_name = StringField(
        "Last Name", validators=[DataRequired(), Length(min=1, max=50)]
    )
    role = SelectField(
        "Role",
        choices=choices_for(Role),
        default=Role.PLAYER.value,
        validators=[DataRequired()],
    )
    phone = StringField("Phone", validators=[Optional(), Length(max=30)])
    skill_level = SelectField(
        "Skill Level", choices=choices_for(SkillLevel), validators=[DataRequired()]
    )
