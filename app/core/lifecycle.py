from enum import Enum


class Lifecycle(str, Enum):
    STARTING = "starting"
    READY = "ready"
    FAILED = "failed"


NOT_READY_MESSAGES = {
    Lifecycle.STARTING: (
        "O servidor está iniciando. O banco de dados está sendo configurado. "
        "Tente novamente em alguns segundos."
    ),
    Lifecycle.FAILED: "O servidor não conseguiu inicializar o banco de dados.",
}
