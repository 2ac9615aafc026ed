"""
Brazilian routes database
==========================================================

Curated road distances between popular city pairs plus coordinates
for capitals and large regional centres. Names follow "City, UF".

Distances are approximate and meant for demonstration.
"""

import unicodedata
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from geodesic import Coordinate


@dataclass(frozen=True)
class Route:
    """Direction-agnostic road distance between two locations"""
    origin: str
    destination: str
    distance_km: float


ROUTES = (
    Route("São Paulo, SP", "Rio de Janeiro, RJ", 430),
    Route("São Paulo, SP", "Brasília, DF", 1016),
    Route("Rio de Janeiro, RJ", "Brasília, DF", 1148),
    Route("São Paulo, SP", "Campinas, SP", 95),
    Route("Rio de Janeiro, RJ", "Niterói, RJ", 13),
    Route("Belo Horizonte, MG", "Ouro Preto, MG", 100),
    Route("Salvador, BA", "Feira de Santana, BA", 108),
    Route("Fortaleza, CE", "Sobral, CE", 230),
    Route("Recife, PE", "Olinda, PE", 10),
    Route("Natal, RN", "Mossoró, RN", 280),
    Route("João Pessoa, PB", "Campina Grande, PB", 120),
    Route("Maceió, AL", "Aracaju, SE", 270),
    Route("Manaus, AM", "Belém, PA", 1120),
    Route("Belém, PA", "Macapá, AP", 520),
    Route("Curitiba, PR", "Florianópolis, SC", 300),
    Route("Porto Alegre, RS", "Florianópolis, SC", 470),
    Route("Vitória, ES", "Belo Horizonte, MG", 520),
    Route("Goiânia, GO", "Brasília, DF", 209),
    Route("Cuiabá, MT", "Campo Grande, MS", 880),
    Route("Campinas, SP", "Santos, SP", 143),
    Route("Santos, SP", "São Paulo, SP", 72),
    Route("Ribeirão Preto, SP", "São Paulo, SP", 313),
    Route("Uberlândia, MG", "Uberaba, MG", 130),
    Route("Rio de Janeiro, RJ", "Belo Horizonte, MG", 434),
    Route("Salvador, BA", "Recife, PE", 800),
    Route("Recife, PE", "João Pessoa, PB", 120),
    Route("Maceió, AL", "Recife, PE", 250),
    Route("Aracaju, SE", "Salvador, BA", 330),
    Route("Palmas, TO", "Brasília, DF", 733),
    Route("Teresina, PI", "Fortaleza, CE", 530),
    Route("São Luís, MA", "Teresina, PI", 430),
    Route("Chapecó, SC", "Florianópolis, SC", 640),
    Route("Porto Velho, RO", "Manaus, AM", 1120),
    Route("Boa Vista, RR", "Macapá, AP", 920),
    Route("Belém, PA", "Recife, PE", 1200),
)

# Keys are canonical names (trim + lowercase). Accents are part of the key,
# so unaccented spellings only resolve where they are listed explicitly.
CITY_COORDINATES = MappingProxyType({
    "são paulo, sp": Coordinate(-23.55052, -46.633308),
    "sao paulo, sp": Coordinate(-23.55052, -46.633308),
    "rio de janeiro, rj": Coordinate(-22.906847, -43.172896),
    "brasilia, df": Coordinate(-15.793889, -47.882778),
    "salvador, ba": Coordinate(-12.977749, -38.50163),
    "curitiba, pr": Coordinate(-25.428954, -49.267137),
    "belo horizonte, mg": Coordinate(-19.916681, -43.934493),
    "porto alegre, rs": Coordinate(-30.027708, -51.228734),
    "recife, pe": Coordinate(-8.047562, -34.877),
    "fortaleza, ce": Coordinate(-3.71722, -38.5434),
    "manaus, am": Coordinate(-3.119027, -60.021731),
    "belem, pa": Coordinate(-1.455833, -48.503887),
    "goiânia, go": Coordinate(-16.686891, -49.2648),
    "campo grande, ms": Coordinate(-20.468684, -54.620121),
    "cuiabá, mt": Coordinate(-15.601416, -56.097892),
    "joão pessoa, pb": Coordinate(-7.119495, -34.845011),
    "teresina, pi": Coordinate(-5.091944, -42.803472),
    "maceió, al": Coordinate(-9.665992, -35.735),
    "aracaju, se": Coordinate(-10.947246, -37.073082),
    "palmas, to": Coordinate(-10.162038, -48.331375),
    "campinas, sp": Coordinate(-22.90556, -47.06083),
    "ribeirão preto, sp": Coordinate(-21.1775, -47.8103),
    "uberlândia, mg": Coordinate(-18.9126, -48.2754),
    "porto velho, ro": Coordinate(-8.76077, -63.8999),
    "boa vista, rr": Coordinate(2.8196, -60.6738),
    "macapá, ap": Coordinate(0.0354, -51.0705),
    "niterói, rj": Coordinate(-22.8832, -43.1037),
    "ouro preto, mg": Coordinate(-20.3856, -43.5033),
    "feira de santana, ba": Coordinate(-12.2669, -38.9667),
    "sobral, ce": Coordinate(-3.6869, -40.3486),
    "olinda, pe": Coordinate(-8.0089, -34.8550),
    "mossoró, rn": Coordinate(-5.187, -37.344),
    "campina grande, pb": Coordinate(-7.2306, -35.8819),
    "são luís, ma": Coordinate(-2.5307, -44.3068),
})


def canonicalize_location(name) -> str:
    """Lookup key for a location name: trimmed and lowercased, accents kept."""
    if not isinstance(name, str):
        return ""
    return name.strip().lower()


def collation_key(name: str):
    """
    Sort key approximating pt-BR collation: accents and case only break ties.
    """
    decomposed = unicodedata.normalize('NFD', name)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name.casefold(), name)


def _state_code(name: str) -> str:
    if ',' not in name:
        return ""
    return name.rsplit(',', 1)[1].strip().upper()


class RoutesRegistry:
    """
    Read-only lookup over a route table and a coordinate table.

    Usage:
        registry = RoutesRegistry()
        registry.find_exact_distance("Rio de Janeiro, RJ", "São Paulo, SP")  # 430
    """

    def __init__(
        self,
        routes: Iterable[Route] = ROUTES,
        coordinates: Mapping[str, Coordinate] = CITY_COORDINATES
    ):
        self._routes = tuple(routes)
        self._coordinates = MappingProxyType({
            canonicalize_location(name): coord for name, coord in coordinates.items()
        })

    @property
    def routes(self):
        return self._routes

    def find_exact_distance(self, origin: str, destination: str) -> Optional[float]:
        """
        Distance of the first declared route joining both locations, in
        either direction, or None.
        """
        o = canonicalize_location(origin)
        d = canonicalize_location(destination)
        if not o or not d:
            return None

        for route in self._routes:
            ro = canonicalize_location(route.origin)
            rd = canonicalize_location(route.destination)
            if (ro == o and rd == d) or (ro == d and rd == o):
                return route.distance_km
        return None

    def coordinates_of(self, name: str) -> Optional[Coordinate]:
        key = canonicalize_location(name)
        if not key:
            return None
        return self._coordinates.get(key)

    def all_known_locations(self) -> List[str]:
        """Every route endpoint, deduplicated and alphabetically sorted."""
        names = set()
        for route in self._routes:
            if route.origin:
                names.add(route.origin)
            if route.destination:
                names.add(route.destination)
        return sorted(names, key=collation_key)

    def locations_by_state(self) -> Dict[str, List[str]]:
        """
        Known locations grouped by state code ("SP", "RJ", ...).
        Names without a state part are grouped under "".
        """
        groups: Dict[str, List[str]] = {}
        for name in self.all_known_locations():
            groups.setdefault(_state_code(name), []).append(name)
        return {state: groups[state] for state in sorted(groups, key=collation_key)}


DEFAULT_REGISTRY = RoutesRegistry()


def get_default_registry() -> RoutesRegistry:
    """Registry over the built-in route and coordinate tables."""
    return DEFAULT_REGISTRY
