"""Accessory type value object."""

from enum import Enum


class AccessoryType(str, Enum):
    """Category of an accessory mounted on a vehicle."""

    INTERIEUR = "INTERIEUR"
    EXTERIEUR = "EXTERIEUR"
    ELECTRONIQUE = "ELECTRONIQUE"
    SECURITE = "SECURITE"
    CONFORT = "CONFORT"

    @property
    def display_name(self) -> str:
        """French label shown to back-office users."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    AccessoryType.INTERIEUR: "Intérieur",
    AccessoryType.EXTERIEUR: "Extérieur",
    AccessoryType.ELECTRONIQUE: "Électronique",
    AccessoryType.SECURITE: "Sécurité",
    AccessoryType.CONFORT: "Confort",
}
