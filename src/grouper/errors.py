EXPECTED_SHAPES = (
    "a sequence of value records (NamedTuple, structured ndarray) "
    "or a sequence of record references (dataclass instances)"
)


class UnsupportedInputError(TypeError):
    def __init__(self, observed: str) -> None:
        self.observed = observed
        self.reason = f"must be {EXPECTED_SHAPES}"

    def __str__(self) -> str:
        return f"unsupported input type ({self.observed}), {self.reason}"
