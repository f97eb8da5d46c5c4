"""
Constants shared by the pipeline so magic strings live in one place.
"""


class ErrorCodes:
    """Error codes"""
    VALIDATION_FAILED = "VALIDATION_FAILED"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    MODEL_UNAVAILABLE = "MODEL_UNAVAILABLE"
    MALFORMED_OUTPUT = "MALFORMED_OUTPUT"
    EMPTY_RESULT = "EMPTY_RESULT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorMessages:
    """User-facing error messages (pt-BR, the locale of the clients)"""
    TOPIC_REQUIRED = "Tema é obrigatório."
    API_KEY_MISSING = "{name} não configurada"
    GENERATION_FAILED = "Erro ao gerar prova"
    NO_MODEL_AVAILABLE = "Nenhum modelo disponível. Último erro: {error}"
    INVALID_MODEL_RESPONSE = "Resposta inválida do modelo"
    NOT_JSON = "Resposta da IA não veio em JSON válido"
    INVALID_FORMAT = "Formato inválido retornado pela IA"
    NO_QUESTIONS = "A resposta não trouxe um array válido em 'questoes'."
    METHOD_NOT_ALLOWED = "Método não permitido"
    NOT_FOUND = "Recurso não encontrado"
    INTERNAL_ERROR = "Erro interno"


class ExamFields:
    """Wire field names of the request and of the generated exam"""
    TOPIC = "tema"
    QUANTITY = "quantidade"
    BOARD = "banca"
    LEVEL = "nivel"
    LEVEL_ALT = "dificuldade"

    TITLE = "titulo"
    QUESTIONS = "questoes"


class DifficultyLevels:
    """Difficulty levels"""
    EASY = "fácil"
    MEDIUM = "médio"
    HARD = "difícil"

    # lowercase spelling -> canonical value
    ALIASES = {
        "fácil": EASY,
        "facil": EASY,
        "easy": EASY,
        "médio": MEDIUM,
        "medio": MEDIUM,
        "medium": MEDIUM,
        "difícil": HARD,
        "dificil": HARD,
        "hard": HARD,
    }


class AnswerKeys:
    """Answer key letters"""
    ALL = ("A", "B", "C", "D")
    DEFAULT = "A"


class Defaults:
    """Request defaults"""
    QUANTITY = 10
    QUANTITY_MIN = 10
    QUANTITY_MAX = 30
    BOARD = "mista"
    DIFFICULTY = DifficultyLevels.MEDIUM
    TITLE_TEMPLATE = "Simulado - {topic}"
    RAW_EXCERPT_CHARS = 800


class HTTPHeaders:
    """HTTP header constants"""
    REQUEST_ID = "X-Request-Id"
    ALLOW = "Allow"
    EXPOSE_HEADERS = "Access-Control-Expose-Headers"


class Timeouts:
    """Timeouts (seconds)"""
    LLM_API = 45
