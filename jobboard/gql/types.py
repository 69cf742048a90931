from graphene import ObjectType, String, Int, List, Field, Boolean, DateTime


class AuditFields:
    created_by = Int()
    updated_by = Int()
    created_at = DateTime()
    updated_at = DateTime()
    creator = Field(lambda: UserObject)
    updater = Field(lambda: UserObject)

    @staticmethod
    def resolve_creator(root, info):
        return root.creator

    @staticmethod
    def resolve_updater(root, info):
        return root.updater


class PermissionObject(AuditFields, ObjectType):
    id = Int()
    key = String()
    label = String()
    description = String()


class RoleObject(AuditFields, ObjectType):
    id = Int()
    name = String()
    description = String()
    permissions = List(lambda: PermissionObject)

    @staticmethod
    def resolve_permissions(root, info):
        return root.permissions


class RolePermissionObject(AuditFields, ObjectType):
    id = Int()
    role_id = Int()
    permission_id = Int()
    role = Field(lambda: RoleObject)
    permission = Field(lambda: PermissionObject)

    @staticmethod
    def resolve_role(root, info):
        return root.role

    @staticmethod
    def resolve_permission(root, info):
        return root.permission


class UserObject(AuditFields, ObjectType):
    id = Int()
    username = String()
    email = String()
    role_id = Int()
    is_active = Boolean()
    role = Field(lambda: RoleObject)

    @staticmethod
    def resolve_role(root, info):
        return root.role


class LocationObject(AuditFields, ObjectType):
    id = Int()
    name = String()


class SalaryRangeObject(AuditFields, ObjectType):
    id = Int()
    label = String()


class CategoryObject(AuditFields, ObjectType):
    id = Int()
    name = String()


class CompanyObject(AuditFields, ObjectType):
    id = Int()
    name = String()
    website = String()
    logo_path = String()
    jobs = List(lambda: JobObject)

    # Resolve the jobs related to this company from the database
    @staticmethod
    def resolve_jobs(root, info):
        return root.jobs


class JobObject(AuditFields, ObjectType):
    id = Int()
    title = String()
    description = String()
    location_id = Int()
    salary_range_id = Int()
    category_id = Int()
    company_id = Int()
    location = Field(lambda: LocationObject)
    salary_range = Field(lambda: SalaryRangeObject)
    category = Field(lambda: CategoryObject)
    company = Field(lambda: CompanyObject)

    @staticmethod
    def resolve_location(root, info):
        return root.location

    @staticmethod
    def resolve_salary_range(root, info):
        return root.salary_range

    @staticmethod
    def resolve_category(root, info):
        return root.category

    @staticmethod
    def resolve_company(root, info):
        return root.company
