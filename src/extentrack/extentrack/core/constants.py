"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_HOURS = 12
DEFAULT_ACTIVITY_DESCRIPTION = "Atividade registrada"
MISSING_PROJECT_NAME = "Projeto não identificado"
NOT_INFORMED = "Não informado"
STUDENT_PAGE_SIZE = 1000

CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"
