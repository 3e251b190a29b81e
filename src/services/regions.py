"""District to region lookup for Ugandan schools."""

from __future__ import annotations

REGION_DISTRICTS: dict[str, list[str]] = {
    "Central": [
        "Kampala", "Wakiso", "Mukono", "Mpigi", "Butambala", "Gomba", "Kalangala", "Kalungu",
        "Kyotera", "Lwengo", "Lyantonde", "Masaka", "Rakai", "Sembabule", "Bukomansimbi",
    ],
    "Eastern": [
        "Jinja", "Iganga", "Kamuli", "Bugiri", "Mayuge", "Luuka", "Namutumba", "Buyende",
        "Kaliro", "Mbale", "Sironko", "Manafwa", "Bududa", "Namisindwa", "Bulambuli",
    ],
    "Northern": [
        "Gulu", "Kitgum", "Pader", "Agago", "Amuru", "Nwoya", "Lamwo", "Lira",
        "Oyam", "Kole", "Alebtong", "Otuke", "Dokolo", "Amolatar", "Apac",
    ],
    "Western": [
        "Mbarara", "Ntungamo", "Isingiro", "Kiruhura", "Ibanda", "Bushenyi", "Mitooma", "Rubirizi",
        "Sheema", "Buhweju", "Fort Portal", "Kabarole", "Kyenjojo", "Kamwenge", "Kyegegwa",
    ],
}

OTHER_REGION = "Other"

_DISTRICT_TO_REGION: dict[str, str] = {
    district: region for region, districts in REGION_DISTRICTS.items() for district in districts
}


def get_region(district: str | None) -> str:
    """Return the region for *district* (exact match), or ``"Other"``."""
    if not district:
        return OTHER_REGION
    return _DISTRICT_TO_REGION.get(district, OTHER_REGION)


def list_regions() -> list[str]:
    """Return every known region followed by the catch-all."""
    return [*REGION_DISTRICTS, OTHER_REGION]
