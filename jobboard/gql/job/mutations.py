from graphene import Mutation, String, Int, Field, Boolean
import logging
from jobboard import crud
from jobboard.gql.types import JobObject
from jobboard.db.database import Session
from jobboard.utils import authd_user, graphql_errors

log = logging.getLogger(__name__)


def _given(**kwargs):
    return {k: v for k, v in kwargs.items() if v is not None}


class AddJob(Mutation):
    """ Posts a new job listing (job.create). """
    class Arguments:
        title = String(required=True)
        description = String(required=True)
        location_id = Int(required=True)
        salary_range_id = Int(required=True)
        category_id = Int(required=True)
        company_id = Int(required=True)
    job = Field(lambda: JobObject)

    @authd_user
    @graphql_errors("adding the job")
    def mutate(root, info, **fields):
        log.info(f"AddJob attempt: Title={fields.get('title')}")
        with Session() as session:
            job = crud.jobs.create(session, info.context["user_id"], **fields)
            return AddJob(job=job)


class UpdateJob(Mutation):
    """ Updates an existing job listing (job.update). Omitted arguments are left unchanged. """
    class Arguments:
        job_id = Int(required=True)
        title = String()
        description = String()
        location_id = Int()
        salary_range_id = Int()
        category_id = Int()
        company_id = Int()
    job = Field(lambda: JobObject)

    @authd_user
    @graphql_errors("updating the job")
    def mutate(root, info, job_id, **fields):
        with Session() as session:
            job = crud.jobs.update(session, info.context["user_id"], job_id, **_given(**fields))
            return UpdateJob(job=job)


class DeleteJob(Mutation):
    """ Deletes a job listing (job.delete). """
    class Arguments: id = Int(required=True)
    success = Boolean()

    @authd_user
    @graphql_errors("deleting the job")
    def mutate(root, info, id):
        with Session() as session:
            return DeleteJob(success=crud.jobs.delete(session, info.context["user_id"], id))
