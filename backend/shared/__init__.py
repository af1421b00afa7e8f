"""
Shared module for common utilities used by the REST API and the CLI.

STRUCTURE:
- shared.security: Authentication and authorization
  - auth.py: JWT signing/verification, current_user_context, require_roles

- shared.infrastructure: Database and request tracing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, RecordStatus, KaratLimits

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with error codes and auto-logging
  - validators.py: Identifier format and input sanitization

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, RecordStatus
    from shared.utils.exceptions import NotFoundError, DuplicateCodeError
    from shared.utils.validators import is_valid_entity_id
"""
