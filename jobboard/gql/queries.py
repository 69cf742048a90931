from graphene import ObjectType, List, Field, Int, String
import logging

from jobboard import crud
from jobboard.access import get_user_permission_keys
from jobboard.db.database import Session
from jobboard.db.models import User
from jobboard.errors import Unauthenticated
from jobboard.gql.types import (
    CategoryObject, CompanyObject, JobObject, LocationObject, PermissionObject, RoleObject,
    SalaryRangeObject, UserObject,
)
from jobboard.utils import authd_user, graphql_errors

log = logging.getLogger(__name__)


def _list_resolver(repository, plural):
    @authd_user
    @graphql_errors(f"retrieving {plural}")
    def resolve(root, info):
        with Session() as session:
            return repository.list(session, info.context["user_id"])
    return staticmethod(resolve)


def _get_resolver(repository, singular):
    @authd_user
    @graphql_errors(f"retrieving {singular}")
    def resolve(root, info, id):
        with Session() as session:
            return repository.get(session, info.context["user_id"], id)
    return staticmethod(resolve)


class Query(ObjectType):
    """ Defines the available GraphQL queries. Every field requires a bearer token. """

    me = Field(UserObject, description="Get the currently authenticated user's details.")
    my_permissions = List(String, description="Permission keys granted to the current user.")
    jobs = List(JobObject, description="List job listings. (job.view)")
    job = Field(JobObject, id=Int(required=True), description="Get a job listing by ID. (job.view)")
    companies = List(CompanyObject, description="List companies. (company.view)")
    company = Field(CompanyObject, id=Int(required=True), description="Get a company by ID. (company.view)")
    locations = List(LocationObject, description="List locations. (location.view)")
    salary_ranges = List(SalaryRangeObject, description="List salary ranges. (salary_range.view)")
    categories = List(CategoryObject, description="List categories. (category.view)")
    roles = List(RoleObject, description="List roles with their permissions. (role.view)")
    permissions = List(PermissionObject, description="List permissions. (permission.view)")
    users = List(UserObject, description="List users. (user.view)")
    user = Field(UserObject, id=Int(required=True), description="Get a user by ID. (user.view)")

    # --- RESOLVERS ---

    @staticmethod
    @authd_user
    @graphql_errors("retrieving the current user")
    def resolve_me(root, info):
        with Session() as session:
            user = session.get(User, info.context["user_id"])
            if user is None:
                raise Unauthenticated("Authentication failed.")
            return user

    @staticmethod
    @authd_user
    @graphql_errors("retrieving permissions for the current user")
    def resolve_my_permissions(root, info):
        with Session() as session:
            return sorted(get_user_permission_keys(session, info.context["user_id"]))

    resolve_jobs = _list_resolver(crud.jobs, "jobs")
    resolve_job = _get_resolver(crud.jobs, "job details")
    resolve_companies = _list_resolver(crud.companies, "companies")
    resolve_company = _get_resolver(crud.companies, "company details")
    resolve_locations = _list_resolver(crud.locations, "locations")
    resolve_salary_ranges = _list_resolver(crud.salary_ranges, "salary ranges")
    resolve_categories = _list_resolver(crud.categories, "categories")
    resolve_roles = _list_resolver(crud.roles, "roles")
    resolve_permissions = _list_resolver(crud.permissions, "permissions")
    resolve_users = _list_resolver(crud.users, "users")
    resolve_user = _get_resolver(crud.users, "user details")
