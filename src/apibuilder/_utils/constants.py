# Environment variables
ENV_BASE_URL = "APIBUILDER_URL"
ENV_API_PATH = "APIBUILDER_API_PATH"
ENV_ACCESS_TOKEN = "APIBUILDER_ACCESS_TOKEN"
ENV_TOKEN_TYPE = "APIBUILDER_TOKEN_TYPE"
ENV_TIMEOUT = "APIBUILDER_TIMEOUT"

DOTENV_FILE = ".env"

# Headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_LENGTH = "Content-Length"

DEFAULT_TIMEOUT = 30.0

LOGGER_NAME = "apibuilder"
