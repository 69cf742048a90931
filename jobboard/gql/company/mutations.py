from graphene import Mutation, String, Int, Field, Boolean
import logging
from jobboard import crud
from jobboard.gql.types import CompanyObject
from jobboard.db.database import Session
from jobboard.utils import authd_user, graphql_errors

log = logging.getLogger(__name__)


class AddCompany(Mutation):
    """ Creates a company profile (company.create). Company names are unique. """
    class Arguments:
        name = String(required=True)
        website = String()
        logo_path = String(description="Path of an already uploaded logo file.")
    company = Field(lambda: CompanyObject)

    @authd_user
    @graphql_errors("adding the company")
    def mutate(root, info, name, website=None, logo_path=None):
        log.info(f"AddCompany attempt: Name={name}")
        with Session() as session:
            company = crud.companies.create(
                session, info.context["user_id"], name=name, website=website, logo_path=logo_path,
            )
            return AddCompany(company=company)


class UpdateCompany(Mutation):
    """ Updates a company profile (company.update). An empty string clears website or logo_path. """
    class Arguments:
        company_id = Int(required=True)
        name = String()
        website = String()
        logo_path = String()
    company = Field(lambda: CompanyObject)

    @authd_user
    @graphql_errors("updating the company")
    def mutate(root, info, company_id, name=None, website=None, logo_path=None):
        changes = {}
        if name is not None:
            changes["name"] = name
        # "" means clear for the optional columns
        if website is not None:
            changes["website"] = website or None
        if logo_path is not None:
            changes["logo_path"] = logo_path or None
        with Session() as session:
            company = crud.companies.update(session, info.context["user_id"], company_id, **changes)
            return UpdateCompany(company=company)


class DeleteCompany(Mutation):
    """ Deletes a company (company.delete). Fails while jobs still reference it. """
    class Arguments:
        id = Int(required=True)
    success = Boolean()

    @authd_user
    @graphql_errors("deleting the company")
    def mutate(root, info, id):
        log.info(f"DeleteCompany attempt for ID: {id}")
        with Session() as session:
            return DeleteCompany(success=crud.companies.delete(session, info.context["user_id"], id))
