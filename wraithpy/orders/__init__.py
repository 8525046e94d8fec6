"""Typed order commands and the parse tree walker."""

from wraithpy.orders.model import (
    Abandon,
    Assemble,
    Bombard,
    Buy,
    Claim,
    Coordinates,
    Disassemble,
    Discharge,
    Draft,
    Invade,
    Move,
    NameOrbit,
    NameSystem,
    NameUnit,
    News,
    Order,
    PayAll,
    PayLocal,
    Probe,
    ProbeSystem,
    Raid,
    RationAll,
    RationLocal,
    Retool,
    Secret,
    Sell,
    Setup,
    SupportAttack,
    SupportDefend,
    Survey,
    SurveySystem,
    Transfer,
    TransferItem,
    Unit,
    Unknown,
    WalkError,
)
from wraithpy.orders.walker import ORDER_WALKERS, walk

__all__ = [
    "ORDER_WALKERS",
    "Abandon",
    "Assemble",
    "Bombard",
    "Buy",
    "Claim",
    "Coordinates",
    "Disassemble",
    "Discharge",
    "Draft",
    "Invade",
    "Move",
    "NameOrbit",
    "NameSystem",
    "NameUnit",
    "News",
    "Order",
    "PayAll",
    "PayLocal",
    "Probe",
    "ProbeSystem",
    "Raid",
    "RationAll",
    "RationLocal",
    "Retool",
    "Secret",
    "Sell",
    "Setup",
    "SupportAttack",
    "SupportDefend",
    "Survey",
    "SurveySystem",
    "Transfer",
    "TransferItem",
    "Unit",
    "Unknown",
    "WalkError",
    "walk",
]
