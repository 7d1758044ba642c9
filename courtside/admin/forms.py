"""Forms for the admin blueprint."""

from wtforms import SelectField, StringField
from wtforms.validators import DataRequired

from courtside.core.types import Role, choices_for
from courtside.forms import ApiForm


class AssignRoleForm(ApiForm):
    """Form for changing another user's role."""

    target_user_id = StringField("Target User", validators=[DataRequired()])
    new_role = SelectField("Role", choices=choices_for(Role), validators=[DataRequired()])
