from graphene import ObjectType
from jobboard.gql.job.mutations import AddJob, UpdateJob, DeleteJob
from jobboard.gql.company.mutations import AddCompany, UpdateCompany, DeleteCompany
from jobboard.gql.lookup.mutations import (
    AddLocation, UpdateLocation, DeleteLocation,
    AddSalaryRange, UpdateSalaryRange, DeleteSalaryRange,
    AddCategory, UpdateCategory, DeleteCategory,
)
from jobboard.gql.rbac.mutations import (
    AddRole, UpdateRole, DeleteRole,
    AddPermission, UpdatePermission, DeletePermission,
    GrantPermission, RevokePermission,
)
from jobboard.gql.user.mutations import (
    LoginUser, AddUser, UpdateUser, ChangePassword, DeleteUser
)


class Mutation(ObjectType):
    """ Aggregates all mutations for the GraphQL schema. """

    # Job listings
    add_job = AddJob.Field()
    update_job = UpdateJob.Field()
    delete_job = DeleteJob.Field()

    # Companies
    add_company = AddCompany.Field()
    update_company = UpdateCompany.Field()
    delete_company = DeleteCompany.Field()

    # Lookups
    add_location = AddLocation.Field()
    update_location = UpdateLocation.Field()
    delete_location = DeleteLocation.Field()
    add_salary_range = AddSalaryRange.Field()
    update_salary_range = UpdateSalaryRange.Field()
    delete_salary_range = DeleteSalaryRange.Field()
    add_category = AddCategory.Field()
    update_category = UpdateCategory.Field()
    delete_category = DeleteCategory.Field()

    # RBAC
    add_role = AddRole.Field()
    update_role = UpdateRole.Field()
    delete_role = DeleteRole.Field()
    add_permission = AddPermission.Field()
    update_permission = UpdatePermission.Field()
    delete_permission = DeletePermission.Field()
    grant_permission = GrantPermission.Field()
    revoke_permission = RevokePermission.Field()

    # Users
    login_user = LoginUser.Field()         # Public Access
    add_user = AddUser.Field()
    update_user = UpdateUser.Field()
    change_password = ChangePassword.Field()
    delete_user = DeleteUser.Field()
