"""
Use Cases

Organized into domain folders:
- auth/: Session lifecycle
- roles/: Role management and assignment
- permissions/: Permission catalog
- users/: Account status
- audit/: Audit logs

Import from subdirectories.
"""
