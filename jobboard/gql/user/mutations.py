import logging
from graphene import Mutation, String, Int, Field, Boolean

from jobboard import crud
from jobboard.utils import authd_user, generate_token, graphql_errors
from jobboard.db.database import Session
from jobboard.gql.types import UserObject

log = logging.getLogger(__name__)


class LoginUser(Mutation):
    """ Authenticates a user and returns a JWT token. """
    class Arguments:
        email = String(required=True)
        password = String(required=True)
    token = String()

    @staticmethod
    @graphql_errors("logging in")
    def mutate(root, info, email, password):
        log.info(f"Login attempt for email: {email}")
        with Session() as session:
            user = crud.users.authenticate(session, email, password)
            return LoginUser(token=generate_token(user.id))


class AddUser(Mutation):
    """ Creates a user account with an initial password (user.create). """
    class Arguments:
        username = String(required=True)
        email = String(required=True)
        password = String(required=True)
        role_id = Int(required=True)
        is_active = Boolean(default_value=True)
    user = Field(lambda: UserObject)

    @authd_user
    @graphql_errors("adding the user")
    def mutate(root, info, username, email, password, role_id, is_active=True):
        log.info(f"AddUser attempt: email={email}, role_id={role_id}")
        with Session() as session:
            user = crud.users.create(
                session, info.context["user_id"],
                username=username, email=email, password=password, role_id=role_id, is_active=is_active,
            )
            return AddUser(user=user)


class UpdateUser(Mutation):
    """ Updates a user's profile, role or active flag (user.update). """
    class Arguments:
        user_id = Int(required=True)
        username = String()
        email = String()
        role_id = Int()
        is_active = Boolean()
    user = Field(lambda: UserObject)

    @authd_user
    @graphql_errors("updating the user")
    def mutate(root, info, user_id, **fields):
        changes = {k: v for k, v in fields.items() if v is not None}
        with Session() as session:
            return UpdateUser(user=crud.users.update(session, info.context["user_id"], user_id, **changes))


class ChangePassword(Mutation):
    """ Sets a user's password. Own password: give current_password. Anyone else's: user.update. """
    class Arguments:
        user_id = Int(required=True)
        new_password = String(required=True)
        current_password = String()
    success = Boolean()

    @authd_user
    @graphql_errors("changing the password")
    def mutate(root, info, user_id, new_password, current_password=None):
        with Session() as session:
            success = crud.users.set_password(
                session, info.context["user_id"], user_id, new_password, current_password=current_password,
            )
            return ChangePassword(success=success)


class DeleteUser(Mutation):
    """ Deletes a user account (user.delete). Roles the user created or last updated go with it. """
    class Arguments: user_id = Int(required=True)
    success = Boolean()

    @authd_user
    @graphql_errors("deleting the user")
    def mutate(root, info, user_id):
        with Session() as session:
            return DeleteUser(success=crud.users.delete(session, info.context["user_id"], user_id))
