"""User registration — command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class RegisterUser:
    """Create a user account. Callers hash the password with ``hash_password`` first."""

    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    address: String(max_length=255)
    city: String(max_length=100)
    zip_code: String(max_length=20)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.get_by_email(command.email) is not None:
            raise ValidationError({"email": ["User already exists"]})

        user = User.register(
            email=command.email,
            password_hash=command.password_hash,
            first_name=command.first_name,
            last_name=command.last_name,
            address=command.address,
            city=command.city,
            zip_code=command.zip_code,
        )
        repo.add(user)
        logger.info("user_registered", user_id=user.id)
        return user.id
