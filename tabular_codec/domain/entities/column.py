from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Column:
    index: int
    name: str
    type: type = str

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Column index must be non-negative, got {self.index}")
        if not self.name:
            raise ValueError(f"Column {self.index} must have a name")

    def __str__(self) -> str:
        return f"{self.index} - {self.name}[{self.type.__name__}]"
