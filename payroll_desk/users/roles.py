from rolepermissions.roles import AbstractUserRole


class Admin(AbstractUserRole):
    available_permissions = {
        'manage_users': True,
        'manage_employees': True,
        'delete_employees': True,
        'edit_payroll': True,
        'manage_overtime': True,
        'manage_traffic_fines': True,
        'view_audit_log': True,
    }


class Clerk(AbstractUserRole):
    available_permissions = {
        'manage_employees': True,
        'edit_payroll': True,
        'manage_overtime': True,
        'manage_traffic_fines': True,
        'view_audit_log': True,
    }
