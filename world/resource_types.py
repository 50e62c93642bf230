# coding: utf-8
from __future__ import annotations

"""Resource type enumeration and categories."""

from enum import Enum
from typing import Set


class ResourceType(Enum):
    """Every resource that can sit on a tile or in the inventory."""

    # Raw
    GRAIN = "grain"
    WOOD = "wood"
    ORE = "ore"
    CLAY = "clay"
    STONE = "stone"
    COTTON = "cotton"
    FUR = "fur"
    GRAPE = "grape"
    PRECIOUS_METAL = "precious_metal"
    PRECIOUS_STONES = "precious_stones"
    SALT = "salt"
    SPICE = "spice"
    CATTLE = "cattle"
    GOAT = "goat"
    SHEEP = "sheep"
    HORSE = "horse"
    HOGS = "hogs"
    WOOL = "wool"
    MANDRAKE = "mandrake"
    TEA_LEAVES = "tea_leaves"
    FISH = "fish"
    IRON = "iron"
    DYE = "dye"
    SAFFRON = "saffron"
    SILK = "silk"
    VANILLA = "vanilla"
    FLOWERS = "flowers"
    SILICATES = "silicates"
    RUBBER = "rubber"
    ALUMINUM = "aluminum"
    COAL = "coal"
    URANIUM = "uranium"
    CRUDE_OIL = "crude_oil"

    # Manufactured
    FOOD = "food"
    LUMBER = "lumber"
    TOOLS = "tools"
    AMENITIES = "amenities"
    BREAD = "bread"
    WINE = "wine"
    LEATHER = "leather"
    CURED_MEAT = "cured_meat"
    CERAMIC_POTS = "ceramic_pots"
    METAL_INGOT = "metal_ingot"
    METAL_TOOL = "metal_tool"
    FABRIC = "fabric"
    SALTED_FISH = "salted_fish"
    HERBAL_MEDICINE = "herbal_medicine"
    JEWELRY = "jewelry"
    COINS = "coins"
    PAPER = "paper"
    GLASS = "glass"
    STEEL = "steel"


# Resources that count toward the food stock shown to the player
EDIBLE_RESOURCES: Set[ResourceType] = {
    ResourceType.FOOD,
    ResourceType.BREAD,
    ResourceType.CURED_MEAT,
    ResourceType.FISH,
    ResourceType.GRAIN,
    ResourceType.GRAPE,
}

__all__ = [
    "ResourceType",
    "EDIBLE_RESOURCES",
]
