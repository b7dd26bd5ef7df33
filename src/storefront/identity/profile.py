"""User profile management — command and handler."""

from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.user import User

_PROFILE_FIELDS = ("first_name", "last_name", "address", "city", "zip_code")


@storefront.command(part_of="User")
class UpdateProfile:
    """Partial profile update. Fields left out (None) keep their current value."""

    user_id: Integer(required=True)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    address: String(max_length=255)
    city: String(max_length=100)
    zip_code: String(max_length=20)


@storefront.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        changes = {name: getattr(command, name) for name in _PROFILE_FIELDS if getattr(command, name) is not None}

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_profile(**changes)
        repo.add(user)
        logger.info("profile_updated", user_id=user.id, fields=sorted(changes))
