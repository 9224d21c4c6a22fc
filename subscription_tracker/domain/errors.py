class PersistenceError(RuntimeError):
    """Raised when the storage backend fails to execute a statement."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation
