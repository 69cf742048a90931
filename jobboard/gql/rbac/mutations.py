from graphene import Mutation, String, Int, Field, Boolean
import logging
from jobboard import crud
from jobboard.gql.types import RoleObject, PermissionObject, RolePermissionObject
from jobboard.db.database import Session
from jobboard.utils import authd_user, graphql_errors

log = logging.getLogger(__name__)


def _given(**kwargs):
    return {k: v for k, v in kwargs.items() if v is not None}


class AddRole(Mutation):
    """ Creates a role (role.create). Role names are unique. """
    class Arguments:
        name = String(required=True)
        description = String()
    role = Field(lambda: RoleObject)

    @authd_user
    @graphql_errors("adding the role")
    def mutate(root, info, name, description=None):
        with Session() as session:
            return AddRole(role=crud.roles.create(session, info.context["user_id"], name=name, description=description))


class UpdateRole(Mutation):
    """ Updates a role (role.update). """
    class Arguments:
        role_id = Int(required=True)
        name = String()
        description = String()
    role = Field(lambda: RoleObject)

    @authd_user
    @graphql_errors("updating the role")
    def mutate(root, info, role_id, **fields):
        with Session() as session:
            return UpdateRole(role=crud.roles.update(session, info.context["user_id"], role_id, **_given(**fields)))


class DeleteRole(Mutation):
    """ Deletes a role and its grants (role.delete). Fails while users still hold it. """
    class Arguments: id = Int(required=True)
    success = Boolean()

    @authd_user
    @graphql_errors("deleting the role")
    def mutate(root, info, id):
        with Session() as session:
            return DeleteRole(success=crud.roles.delete(session, info.context["user_id"], id))


class AddPermission(Mutation):
    """ Creates a permission (permission.create). The key is what authorization checks test. """
    class Arguments:
        key = String(required=True, description="Stable identifier, e.g. 'job.create'.")
        label = String(required=True)
        description = String()
    permission = Field(lambda: PermissionObject)

    @authd_user
    @graphql_errors("adding the permission")
    def mutate(root, info, key, label, description=None):
        with Session() as session:
            permission = crud.permissions.create(
                session, info.context["user_id"], key=key, label=label, description=description,
            )
            return AddPermission(permission=permission)


class UpdatePermission(Mutation):
    """ Updates a permission (permission.update). """
    class Arguments:
        permission_id = Int(required=True)
        key = String()
        label = String()
        description = String()
    permission = Field(lambda: PermissionObject)

    @authd_user
    @graphql_errors("updating the permission")
    def mutate(root, info, permission_id, **fields):
        with Session() as session:
            permission = crud.permissions.update(session, info.context["user_id"], permission_id, **_given(**fields))
            return UpdatePermission(permission=permission)


class DeletePermission(Mutation):
    """ Deletes a permission and every grant of it (permission.delete). """
    class Arguments: id = Int(required=True)
    success = Boolean()

    @authd_user
    @graphql_errors("deleting the permission")
    def mutate(root, info, id):
        with Session() as session:
            return DeletePermission(success=crud.permissions.delete(session, info.context["user_id"], id))


class GrantPermission(Mutation):
    """ Grants a permission to a role (role_permission.create). """
    class Arguments:
        role_id = Int(required=True)
        permission_id = Int(required=True)
    role_permission = Field(lambda: RolePermissionObject)

    @authd_user
    @graphql_errors("granting the permission")
    def mutate(root, info, role_id, permission_id):
        with Session() as session:
            row = crud.role_permissions.grant(session, info.context["user_id"], role_id, permission_id)
            log.info(f"Permission {permission_id} granted to role {role_id}")
            return GrantPermission(role_permission=row)


class RevokePermission(Mutation):
    """ Revokes a permission from a role (role_permission.delete). """
    class Arguments:
        role_id = Int(required=True)
        permission_id = Int(required=True)
    success = Boolean()

    @authd_user
    @graphql_errors("revoking the permission")
    def mutate(root, info, role_id, permission_id):
        with Session() as session:
            success = crud.role_permissions.revoke(session, info.context["user_id"], role_id, permission_id)
            log.info(f"Permission {permission_id} revoked from role {role_id}")
            return RevokePermission(success=success)
