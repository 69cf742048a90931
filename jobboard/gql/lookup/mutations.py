"""Mutations for the simple lookup tables jobs point at: locations, salary ranges, categories."""
from graphene import Mutation, String, Int, Field, Boolean
from jobboard import crud
from jobboard.gql.types import LocationObject, SalaryRangeObject, CategoryObject
from jobboard.db.database import Session
from jobboard.utils import authd_user, graphql_errors


def lookup_mutations(name, repository, object_type, text_field):
    """ Builds Add<name>/Update<name>/Delete<name> for a table with a single text column. """
    noun = name.lower()
    output = repository.prefix

    @authd_user
    @graphql_errors(f"adding the {noun}")
    def add(root, info, **values):
        with Session() as session:
            obj = repository.create(session, info.context["user_id"], **values)
            return add_cls(**{output: obj})

    @authd_user
    @graphql_errors(f"updating the {noun}")
    def update(root, info, id, **values):
        with Session() as session:
            obj = repository.update(session, info.context["user_id"], id, **values)
            return update_cls(**{output: obj})

    @authd_user
    @graphql_errors(f"deleting the {noun}")
    def delete(root, info, id):
        with Session() as session:
            return delete_cls(success=repository.delete(session, info.context["user_id"], id))

    add_cls = type(f"Add{name}", (Mutation,), {
        "__doc__": f"Creates a {noun} ({output}.create).",
        "Arguments": type("Arguments", (), {text_field: String(required=True)}),
        output: Field(lambda: object_type),
        "mutate": add,
    })
    update_cls = type(f"Update{name}", (Mutation,), {
        "__doc__": f"Renames a {noun} ({output}.update).",
        "Arguments": type("Arguments", (), {"id": Int(required=True), text_field: String(required=True)}),
        output: Field(lambda: object_type),
        "mutate": update,
    })
    delete_cls = type(f"Delete{name}", (Mutation,), {
        "__doc__": f"Deletes a {noun} ({output}.delete). Fails while jobs still reference it.",
        "Arguments": type("Arguments", (), {"id": Int(required=True)}),
        "success": Boolean(),
        "mutate": delete,
    })
    return add_cls, update_cls, delete_cls


AddLocation, UpdateLocation, DeleteLocation = lookup_mutations(
    "Location", crud.locations, LocationObject, "name")
AddSalaryRange, UpdateSalaryRange, DeleteSalaryRange = lookup_mutations(
    "SalaryRange", crud.salary_ranges, SalaryRangeObject, "label")
AddCategory, UpdateCategory, DeleteCategory = lookup_mutations(
    "Category", crud.categories, CategoryObject, "name")
