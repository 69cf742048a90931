"""Executes the graphene schema directly with a fake request carrying the bearer token."""
from jobboard.db.data import roles_data
from jobboard.gql.schema import schema
from jobboard.utils import generate_token

from conftest import FakeRequest, PASSWORD


def run(query, user=None, **variables):
    headers = {"Authorization": f"Bearer {generate_token(user.id)}"} if user is not None else {}
    return schema.execute(query, variable_values=variables or None, context_value={"request": FakeRequest(headers)})


def error_code(result):
    assert result.errors, "expected an error"
    return result.errors[0].extensions["code"]


ADD_COMPANY = """
mutation AddCompany($name: String!) {
  addCompany(name: $name) { company { id name createdBy updatedBy } }
}
"""

ADD_JOB = """
mutation AddJob($title: String!, $locationId: Int!, $salaryRangeId: Int!, $categoryId: Int!, $companyId: Int!) {
  addJob(title: $title, description: "Develop web apps", locationId: $locationId,
         salaryRangeId: $salaryRangeId, categoryId: $categoryId, companyId: $companyId) {
    job { id title location { name } company { name } createdBy creator { username } }
  }
}
"""


def test_login_returns_a_usable_token(session, viewer):
    result = run(
        'mutation { loginUser(email: "vera@jobboard.io", password: "%s") { token } }' % PASSWORD
    )
    assert result.errors is None
    token = result.data["loginUser"]["token"]

    me = schema.execute(
        "{ me { id username role { name } } }",
        context_value={"request": FakeRequest({"Authorization": f"Bearer {token}"})},
    )
    assert me.errors is None
    assert me.data["me"] == {"id": viewer.id, "username": "vera", "role": {"name": "viewer"}}


def test_login_with_bad_password(session, viewer):
    result = run('mutation { loginUser(email: "vera@jobboard.io", password: "Wr0ng!Password") { token } }')
    assert error_code(result) == "UNAUTHENTICATED"


def test_queries_need_a_token(session):
    assert error_code(run("{ jobs { id } }")) == "UNAUTHENTICATED"


def test_my_permissions(session, viewer):
    result = run("{ myPermissions }", user=viewer)
    expected = next(r for r in roles_data if r["name"] == "viewer")["permissions"]
    assert result.data["myPermissions"] == sorted(expected)


def test_viewer_cannot_add_company(session, viewer):
    assert error_code(run(ADD_COMPANY, user=viewer, name="Acme")) == "UNAUTHORIZED"


def test_add_company_and_duplicate(session, employer):
    first = run(ADD_COMPANY, user=employer, name="Acme")
    assert first.errors is None
    assert first.data["addCompany"]["company"]["createdBy"] == employer.id
    assert first.data["addCompany"]["company"]["updatedBy"] == employer.id

    assert error_code(run(ADD_COMPANY, user=employer, name="Acme")) == "VALIDATION_ERROR"


def test_add_job_and_list(session, employer, viewer, lookups, company):
    variables = dict(title="Software Engineer", companyId=company.id, **{
        "locationId": lookups["location_id"],
        "salaryRangeId": lookups["salary_range_id"],
        "categoryId": lookups["category_id"],
    })
    created = run(ADD_JOB, user=employer, **variables)
    assert created.errors is None
    job = created.data["addJob"]["job"]
    assert job["location"] == {"name": "Remote"}
    assert job["company"] == {"name": "MetaTechA"}
    assert job["createdBy"] == employer.id
    assert job["creator"] == {"username": "bob"}

    listed = run("{ jobs { title salaryRange { label } category { name } } }", user=viewer)
    assert listed.errors is None
    assert listed.data["jobs"] == [
        {"title": "Software Engineer", "salaryRange": {"label": "50k - 100k"}, "category": {"name": "Engineering"}},
    ]


def test_add_job_with_unknown_location(session, employer, lookups, company):
    result = run(
        ADD_JOB, user=employer, title="Plumber", companyId=company.id, locationId=9999,
        salaryRangeId=lookups["salary_range_id"], categoryId=lookups["category_id"],
    )
    assert error_code(result) == "REFERENTIAL_ERROR"


def test_missing_job(session, viewer):
    assert error_code(run("{ job(id: 404) { id } }", user=viewer)) == "NOT_FOUND"


def test_grant_and_revoke(session, admin, viewer):
    roles = run("{ roles { id name } permissions { id key } }", user=admin)
    role_id = next(r["id"] for r in roles.data["roles"] if r["name"] == "viewer")
    permission_id = next(p["id"] for p in roles.data["permissions"] if p["key"] == "job.create")

    granted = run(
        "mutation($r: Int!, $p: Int!) { grantPermission(roleId: $r, permissionId: $p) "
        "{ rolePermission { role { name } permission { key } } } }",
        user=admin, r=role_id, p=permission_id,
    )
    assert granted.errors is None
    assert granted.data["grantPermission"]["rolePermission"]["permission"] == {"key": "job.create"}
    assert "job.create" in run("{ myPermissions }", user=viewer).data["myPermissions"]

    revoked = run(
        "mutation($r: Int!, $p: Int!) { revokePermission(roleId: $r, permissionId: $p) { success } }",
        user=admin, r=role_id, p=permission_id,
    )
    assert revoked.data["revokePermission"]["success"] is True
    assert "job.create" not in run("{ myPermissions }", user=viewer).data["myPermissions"]


def test_add_location(session, admin, employer):
    result = run('mutation { addLocation(name: "Berlin") { location { id name } } }', user=admin)
    assert result.errors is None
    assert result.data["addLocation"]["location"]["name"] == "Berlin"

    denied = run('mutation { addLocation(name: "Paris") { location { id } } }', user=employer)
    assert error_code(denied) == "UNAUTHORIZED"


def test_inactive_user_token_is_refused(session, inactive_admin):
    assert error_code(run("{ jobs { id } }", user=inactive_admin)) == "UNAUTHORIZED"
