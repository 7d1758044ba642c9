"""Forms for the invitation blueprint."""

from wtforms import SelectField
from wtforms.validators import DataRequired

from courtside.core.types import InvitationStatus
from courtside.forms import ApiForm


class RespondForm(ApiForm):
    """Form for accepting or declining an invitation."""

    response = SelectField(
        "Response",
        choices=[
            (InvitationStatus.ACCEPTED.value, "Accept"),
            (InvitationStatus.DECLINED.value, "Decline"),
        ],
        validators=[DataRequired()],
    )
