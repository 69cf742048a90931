# main.py
import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from starlette_graphene3 import GraphQLApp, make_playground_handler
from jobboard.config import APP_ENV
from jobboard.db.database import prepare_database, Session as AppSession
from jobboard.db.models import Job
from jobboard.gql.schema import schema

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger(__name__)

log.info(f"Running in {APP_ENV.upper()} mode.")

app = FastAPI()

@app.on_event("startup")
def startup_event():
    prepare_database()

# --- Redirect from / to /graphql ---
@app.get("/", include_in_schema=False)
async def redirect_to_graphql():
    """
    Redirects the root path to the GraphQL Playground.
    """
    return RedirectResponse(url="/graphql", status_code=307)

# --- REST endpoints ---
@app.get("/api/v1/system/readiness")
def readiness():
    with AppSession() as session:
        job_count = session.query(Job).count()
    return {"status": "ready", "jobs": job_count}

# --- Mount GraphQLApp ---
app.mount(
    "/graphql",
    GraphQLApp(
        schema=schema,
        on_get=make_playground_handler(),
    ),
)
