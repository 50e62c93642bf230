from __future__ import annotations

"""Technology progression utilities."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple


class Era(Enum):
    """Available technology eras, shown to the player as Acts."""

    DAWN = "Act I: The Dawn"
    BRONZE_AGE = "Act II: The Bronze Age"
    IRON_AGE = "Act III: The Iron Age"
    CLASSICAL_ANTIQUITY = "Act IV: Classical Antiquity"
    MIDDLE_AGES = "Act V: The Middle Ages"
    RENAISSANCE = "Act VI: The Renaissance"
    ENLIGHTENMENT = "Act VII: The Enlightenment"
    MACHINE_AGE = "Act VIII: The Machine Age"
    ATOMIC_AGE = "Act IX: The Atomic Age"
    INTERSTELLAR_AGE = "Act X: The Interstellar Age"


@dataclass(frozen=True)
class Tech:
    id: str
    name: str
    cost: int
    era: Era
    description: str = ""
    prerequisites: Tuple[str, ...] = ()
    unlocks: Tuple[str, ...] = ()


def _tech(id, name, cost, era, description, prerequisites=(), unlocks=()) -> Tech:
    return Tech(id, name, cost, era, description, tuple(prerequisites), tuple(unlocks))


_E = Era

_TECH_LIST = [
    # Dawn
    _tech("agriculture", "Agriculture", 0, _E.DAWN, "The foundation of civilization.", [], ["Farm", "Dwelling", "Palace"]),
    _tech("mining", "Mining", 50, _E.DAWN, "Extract resources.", ["agriculture"], ["Mine", "Stone Pit"]),
    _tech("pottery", "Pottery", 50, _E.DAWN, "Store food.", ["agriculture"], ["Granary", "Ceramic Shop", "Clay Pit", "Bakery"]),
    _tech("animal_husbandry", "Animal Husbandry", 50, _E.DAWN, "Domesticate animals.", ["agriculture"], ["Pasture", "Hunting Camp", "Butcher Shop"]),
    # Bronze Age
    _tech("sailing", "Sailing", 80, _E.BRONZE_AGE, "Navigate the waters.", ["pottery"], ["Dock", "Fishing Net", "Trireme"]),
    _tech("wheel", "The Wheel", 100, _E.BRONZE_AGE, "Transportation revolution.", ["mining"], ["Road", "Carriage", "Stable"]),
    _tech("weaving", "Weaving", 100, _E.BRONZE_AGE, "Create fabrics.", ["animal_husbandry"], ["Weaver", "Tannery"]),
    _tech("mysticism", "Mysticism", 120, _E.BRONZE_AGE, "Connection to the divine.", ["pottery"], ["Altar", "Stonehenge"]),
    # Iron Age
    _tech("archery", "Archery", 100, _E.IRON_AGE, "Ranged warfare.", ["animal_husbandry"], ["Archer", "Watchtower"]),
    _tech("iron_working", "Iron Working", 150, _E.IRON_AGE, "Stronger metals.", ["mining"], ["Iron Mine", "Blacksmith", "Anvil"]),
    _tech("fermentation", "Fermentation", 80, _E.IRON_AGE, "Beverages.", ["agriculture"], ["Fermenting Pit"]),
    _tech("bronze_working", "Bronze Working", 120, _E.IRON_AGE, "Alloys.", ["mining"], ["Spearman", "Smithy", "Hoplite"]),
    _tech("masonry", "Masonry", 100, _E.IRON_AGE, "Stone buildings.", ["mining"], ["Walls", "Residential District", "Water Well"]),
    _tech("writing", "Writing", 150, _E.IRON_AGE, "Record keeping.", ["pottery"], ["Apothecary", "Commercial District"]),
    _tech("mathematics", "Mathematics", 200, _E.IRON_AGE, "Numbers.", ["writing", "archery"], ["Catapult"]),
    _tech("engineering", "Engineering", 300, _E.IRON_AGE, "Construction.", ["mathematics", "masonry"], ["Industrial District", "Irrigated Farm"]),
    _tech("military_tactics", "Military Tactics", 250, _E.IRON_AGE, "Warfare.", ["bronze_working", "archery"], ["Military District", "House Archer"]),
    _tech("currency", "Currency", 300, _E.IRON_AGE, "Standardized trade.", ["writing", "mathematics"], ["Trading Post", "Inn"]),
    _tech("navigation", "Navigation", 300, _E.IRON_AGE, "Ocean travel.", ["sailing", "mathematics"], ["Lighthouse", "Longship"]),
    _tech("horticulture", "Horticulture", 250, _E.IRON_AGE, "Cultivation of plants.", ["agriculture"], ["Hanging Gardens", "Plantation"]),
    # Classical Antiquity
    _tech("coinage", "Coinage", 400, _E.CLASSICAL_ANTIQUITY, "State-issued currency.", ["currency", "iron_working"], ["Mint", "Bazaar"]),
    _tech("education", "Education", 450, _E.CLASSICAL_ANTIQUITY, "Formal learning.", ["writing"], ["School", "Library", "Great Library"]),
    _tech("machinery", "Machinery", 500, _E.CLASSICAL_ANTIQUITY, "Complex mechanisms.", ["engineering", "wheel"], ["Mill", "Gear"]),
    _tech("glassblowing", "Glassblowing", 400, _E.CLASSICAL_ANTIQUITY, "Shaping glass.", ["pottery"], ["Glassmaker", "Sand Pit"]),
    _tech("construction", "Construction", 550, _E.CLASSICAL_ANTIQUITY, "Advanced building techniques.", ["engineering", "masonry"], ["City Walls", "Concrete", "Castle"]),
    _tech("civil_service", "Civil Service", 600, _E.CLASSICAL_ANTIQUITY, "Government administration.", ["writing", "currency"], ["Town Center", "Pikeman"]),
    # Middle Ages
    _tech("guilds", "Guilds", 750, _E.MIDDLE_AGES, "Professional associations.", ["currency", "civil_service"], ["Crafting Guild", "Artisan Studio", "Cobbler", "Grocer"]),
    _tech("theology", "Theology", 700, _E.MIDDLE_AGES, "Study of the divine.", ["mysticism", "writing"], ["Monastery", "Shrine", "Cemetery"]),
    _tech("chivalry", "Chivalry", 800, _E.MIDDLE_AGES, "The knightly code.", ["military_tactics"], ["Knight", "Lancer"]),
    _tech("cartography", "Cartography", 800, _E.MIDDLE_AGES, "Advanced mapping.", ["navigation", "writing"], ["Cog", "Carrack"]),
    _tech("chemistry", "Chemistry", 800, _E.MIDDLE_AGES, "Study of matter.", ["writing", "glassblowing"], ["Chemist", "Distillery", "Brewery"]),
    _tech("metallurgy", "Metallurgy", 850, _E.MIDDLE_AGES, "Advanced metalworking.", ["iron_working", "chemistry"], ["Armory", "Crossbowman"]),
    _tech("physics", "Physics", 900, _E.MIDDLE_AGES, "Laws of nature.", ["mathematics", "machinery"], ["Trebuchet", "Observatory"]),
    _tech("banking", "Banking", 900, _E.MIDDLE_AGES, "Financial systems.", ["coinage", "guilds"], ["Central Bank"]),
    _tech("drama", "Drama", 700, _E.MIDDLE_AGES, "Theatrical arts.", ["writing"], ["Amphitheater", "Park"]),
    _tech("academia", "Academia", 950, _E.MIDDLE_AGES, "Higher learning.", ["education", "theology"], ["University"]),
    _tech("gunpowder", "Gunpowder", 1200, _E.MIDDLE_AGES, "Explosive powder.", ["chemistry", "metallurgy"], ["Musketman"]),
    # Renaissance
    _tech("printing_press", "Printing Press", 1500, _E.RENAISSANCE, "Mass production of text.", ["machinery", "writing"], ["Print Shop", "Newspaper"]),
    _tech("optics", "Optics", 1300, _E.RENAISSANCE, "Lenses and light.", ["glassblowing", "physics"], ["Eye Glasses", "Telescope"]),
    _tech("anatomy", "Anatomy", 1400, _E.RENAISSANCE, "Detailed medical study.", ["academia", "chemistry"], ["General Hospital"]),
    _tech("blast_furnace", "Blast Furnace", 1600, _E.RENAISSANCE, "High heat smelting.", ["metallurgy"], ["Forge", "Steel", "Indoor Stove"]),
    _tech("naval_engineering", "Naval Engineering", 1500, _E.RENAISSANCE, "Advanced ship design.", ["cartography"], ["Drydock", "Galleon", "Caravel"]),
    _tech("ballistics", "Ballistics", 1800, _E.RENAISSANCE, "Projectile physics.", ["physics", "gunpowder"], ["Cannon", "Explosive"]),
    _tech("globalization", "Globalization", 1400, _E.RENAISSANCE, "Worldwide trade networks.", ["cartography", "banking"], ["Coffee House", "Plaza"]),
    _tech("mechanization", "Mechanization", 1600, _E.RENAISSANCE, "Wind and water power.", ["machinery", "engineering"], ["Windmill"]),
    # Enlightenment
    _tech("industrialization", "Industrialization", 2000, _E.ENLIGHTENMENT, "Machine manufacturing.", ["mechanization", "blast_furnace"], ["Factory", "Coal", "Steam Engine"]),
    _tech("refining", "Refining", 1800, _E.ENLIGHTENMENT, "Chemical purification.", ["chemistry"], ["Refinery", "Fuel", "Rubber"]),
    _tech("enlightenment_civics", "Enlightenment Civics", 1900, _E.ENLIGHTENMENT, "Reason and individualism.", ["globalization"], ["City Hall", "Museum", "Currency"]),
    _tech("mass_production", "Mass Production", 2200, _E.ENLIGHTENMENT, "Assembly lines.", ["industrialization"], ["Canned Food", "Sewing Machine", "Tailor"]),
    _tech("modern_warfare", "Modern Warfare", 2400, _E.ENLIGHTENMENT, "Organized large-scale conflict.", ["ballistics"], ["Line Infantry", "Mortar"]),
    _tech("steel_hulls", "Steel Hulls", 2500, _E.ENLIGHTENMENT, "Armored naval vessels.", ["naval_engineering", "blast_furnace"], ["Ironclad", "Frigate"]),
    _tech("cultural_heritage", "Cultural Heritage", 2000, _E.ENLIGHTENMENT, "Celebrating history and arts.", ["drama", "enlightenment_civics"], ["Concert Hall", "Exhibition Hall", "Piano"]),
    _tech("materials_science", "Materials Science", 2300, _E.ENLIGHTENMENT, "New construction materials.", ["blast_furnace", "chemistry"], ["Cement Plant", "Foundry", "Aluminum"]),
    # Machine Age
    _tech("combustion", "Combustion", 3000, _E.MACHINE_AGE, "Internal combustion engines.", ["refining", "industrialization"], ["Oil Well", "Vehicle Factory", "Engine", "Car"]),
    _tech("flight", "Flight", 3200, _E.MACHINE_AGE, "Heavier than air travel.", ["combustion", "physics"], ["Air Force Base", "Aircraft Factory", "Fuselage"]),
    _tech("electronics", "Electronics", 3100, _E.MACHINE_AGE, "Control of electricity.", ["physics", "materials_science"], ["Radio Tower", "Radio", "Light Bulb"]),
    _tech("sanitation", "Sanitation", 2800, _E.MACHINE_AGE, "Public health systems.", ["chemistry", "enlightenment_civics"], ["Water Treatment Plant", "Clinic", "Indoor Toilets", "Soap"]),
    _tech("mass_media", "Mass Media", 2900, _E.MACHINE_AGE, "Broadcast entertainment.", ["electronics", "cultural_heritage"], ["Movie Studio", "Theater", "Movie", "Photograph", "Record Album"]),
]

TECHS: Mapping[str, Tech] = MappingProxyType({t.id: t for t in _TECH_LIST})


def get_tech(tech_id: str) -> Tech:
    try:
        return TECHS[tech_id]
    except KeyError:
        raise KeyError(f"Unknown technology: {tech_id!r}") from None


def can_research(tech_id: str, researched: Iterable[str]) -> bool:
    """True if ``tech_id`` is not yet known and all its prerequisites are."""
    tech = get_tech(tech_id)
    known = set(researched)
    if tech.id in known:
        return False
    return all(p in known for p in tech.prerequisites)


def available_techs(researched: Iterable[str]) -> list[Tech]:
    """Techs that could be researched next, in registry order."""
    known = set(researched)
    return [t for t in TECHS.values() if can_research(t.id, known)]


__all__ = ["Era", "TECHS", "Tech", "available_techs", "can_research", "get_tech"]
