"""Typed order commands produced by the tree walker."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from wraithpy.diagnostics import Diagnostic, DiagnosticSpec

MIN_ORBIT = 0
MAX_ORBIT = 10


@dataclass(frozen=True, slots=True)
class WalkError:
    """Semantic problem found while lowering one order."""

    line: int
    code: str
    message: str

    @classmethod
    def from_spec(cls, spec: DiagnosticSpec, line: int, message: str) -> WalkError:
        return cls(line=line, code=spec.code, message=message)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            code=self.code,
            message=self.message,
            line=self.line,
            severity="error",
            category="walker",
        )

    def __str__(self) -> str:
        return f"{self.line}: {self.message}"


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Location in the cluster; orbit 0 means the system itself."""

    x: int
    y: int
    z: int
    orbit: int = 0

    def __post_init__(self) -> None:
        if not MIN_ORBIT <= self.orbit <= MAX_ORBIT:
            raise ValueError(f"orbit must be in {MIN_ORBIT}..{MAX_ORBIT}, got {self.orbit}")

    def __str__(self) -> str:
        if self.orbit == 0:
            return f"({self.x},{self.y},{self.z})"
        return f"({self.x},{self.y},{self.z},{self.orbit})"


@dataclass(frozen=True, slots=True)
class Unit:
    """Material, population or research, by canonical name."""

    name: str
    tech_level: int = 0

    def __str__(self) -> str:
        if self.tech_level == 0:
            return self.name
        return f"{self.name}-{self.tech_level}"


@dataclass(frozen=True, slots=True)
class TransferItem:
    material: Unit
    quantity: int

    def __str__(self) -> str:
        return f"{self.quantity} {self.material}"


# -------------------------
# Orders
# -------------------------


@dataclass(slots=True, kw_only=True)
class Order:
    """Base for all commands.

    Commands are built best-effort: fields the walker could not read keep
    their defaults and the problem is recorded in `errors`.
    """

    keyword: ClassVar[str] = ""

    line: int = 0
    errors: list[WalkError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(slots=True, kw_only=True)
class Abandon(Order):
    keyword: ClassVar[str] = "abandon"

    location: Coordinates = Coordinates(0, 0, 0)


@dataclass(slots=True, kw_only=True)
class Assemble(Order):
    """Assemble units, optionally into a factory or mine group or at a deposit."""

    keyword: ClassVar[str] = "assemble"

    id: int = 0
    deposit_id: int = 0
    factory_group: int = 0
    mine_group: int = 0
    quantity: int = 0
    unit: Unit = Unit("")


@dataclass(slots=True, kw_only=True)
class Bombard(Order):
    keyword: ClassVar[str] = "bombard"

    id: int = 0
    target_id: int = 0
    pct_committed: int = 0


@dataclass(slots=True, kw_only=True)
class Buy(Order):
    """Market bid. Research is bought whole, so `quantity` stays 0."""

    keyword: ClassVar[str] = "buy"

    id: int = 0
    quantity: int = 0
    unit: Unit = Unit("")
    bid: float = 0.0


@dataclass(slots=True, kw_only=True)
class Claim(Order):
    keyword: ClassVar[str] = "claim"

    id: int = 0
    location: Coordinates = Coordinates(0, 0, 0)


@dataclass(slots=True, kw_only=True)
class Disassemble(Order):
    keyword: ClassVar[str] = "disassemble"

    id: int = 0
    factory_group: int = 0
    mine_group: int = 0
    quantity: int = 0
    unit: Unit = Unit("")


@dataclass(slots=True, kw_only=True)
class Discharge(Order):
    keyword: ClassVar[str] = "discharge"

    id: int = 0
    quantity: int = 0
    profession: str = ""


@dataclass(slots=True, kw_only=True)
class Draft(Order):
    keyword: ClassVar[str] = "draft"

    id: int = 0
    quantity: int = 0
    profession: str = ""


@dataclass(slots=True, kw_only=True)
class Invade(Order):
    keyword: ClassVar[str] = "invade"

    id: int = 0
    target_id: int = 0
    pct_committed: int = 0


@dataclass(slots=True, kw_only=True)
class Move(Order):
    keyword: ClassVar[str] = "move"

    id: int = 0
    location: Coordinates = Coordinates(0, 0, 0)


@dataclass(slots=True, kw_only=True)
class NameUnit(Order):
    keyword: ClassVar[str] = "name"

    id: int = 0
    name: str = ""


@dataclass(slots=True, kw_only=True)
class NameSystem(Order):
    keyword: ClassVar[str] = "name"

    location: Coordinates = Coordinates(0, 0, 0)
    name: str = ""


@dataclass(slots=True, kw_only=True)
class NameOrbit(Order):
    keyword: ClassVar[str] = "name"

    location: Coordinates = Coordinates(0, 0, 0)
    name: str = ""


@dataclass(slots=True, kw_only=True)
class News(Order):
    keyword: ClassVar[str] = "news"

    location: Coordinates = Coordinates(0, 0, 0)
    article: str = ""
    signature: str = ""


@dataclass(slots=True, kw_only=True)
class PayAll(Order):
    keyword: ClassVar[str] = "pay"

    profession: str = ""
    rate: float = 0.0


@dataclass(slots=True, kw_only=True)
class PayLocal(Order):
    keyword: ClassVar[str] = "pay"

    id: int = 0
    profession: str = ""
    rate: float = 0.0


@dataclass(slots=True, kw_only=True)
class Probe(Order):
    """Probe an orbit of the system the unit is in."""

    keyword: ClassVar[str] = "probe"

    id: int = 0
    orbit: int = 0


@dataclass(slots=True, kw_only=True)
class ProbeSystem(Order):
    keyword: ClassVar[str] = "probe"

    id: int = 0
    location: Coordinates = Coordinates(0, 0, 0)


@dataclass(slots=True, kw_only=True)
class Raid(Order):
    keyword: ClassVar[str] = "raid"

    id: int = 0
    target_id: int = 0
    pct_committed: int = 0
    target_unit: Unit = Unit("")


@dataclass(slots=True, kw_only=True)
class RationAll(Order):
    keyword: ClassVar[str] = "ration"

    rate: int = 0


@dataclass(slots=True, kw_only=True)
class RationLocal(Order):
    keyword: ClassVar[str] = "ration"

    id: int = 0
    rate: int = 0


@dataclass(slots=True, kw_only=True)
class Retool(Order):
    keyword: ClassVar[str] = "retool"

    id: int = 0
    factory_group: int = 0
    unit: Unit = Unit("")


@dataclass(slots=True, kw_only=True)
class Secret(Order):
    """Credentials line identifying the player, game and turn."""

    keyword: ClassVar[str] = "secret"

    handle: str = ""
    game: str = ""
    turn: int = 0
    token: str = ""


@dataclass(slots=True, kw_only=True)
class Sell(Order):
    keyword: ClassVar[str] = "sell"

    id: int = 0
    quantity: int = 0
    unit: Unit = Unit("")
    ask: float = 0.0


@dataclass(slots=True, kw_only=True)
class Setup(Order):
    keyword: ClassVar[str] = "setup"

    id: int = 0
    location: Coordinates = Coordinates(0, 0, 0)
    kind: str = ""
    action: str = ""
    items: list[TransferItem] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class SupportAttack(Order):
    keyword: ClassVar[str] = "support"

    id: int = 0
    support_id: int = 0
    target_id: int = 0
    pct_committed: int = 0


@dataclass(slots=True, kw_only=True)
class SupportDefend(Order):
    keyword: ClassVar[str] = "support"

    id: int = 0
    support_id: int = 0
    pct_committed: int = 0


@dataclass(slots=True, kw_only=True)
class Survey(Order):
    """Survey an orbit; orbit 0 surveys wherever the unit is."""

    keyword: ClassVar[str] = "survey"

    id: int = 0
    orbit: int = 0


@dataclass(slots=True, kw_only=True)
class SurveySystem(Order):
    keyword: ClassVar[str] = "survey"

    id: int = 0
    location: Coordinates = Coordinates(0, 0, 0)


@dataclass(slots=True, kw_only=True)
class Transfer(Order):
    keyword: ClassVar[str] = "transfer"

    id: int = 0
    quantity: int = 0
    unit: Unit = Unit("")
    target_id: int = 0


@dataclass(slots=True, kw_only=True)
class Unknown(Order):
    """Line kept by error recovery that matched no order."""

    text: str = ""
