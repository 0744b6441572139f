from models.schemas import Country

ORIGIN_COUNTRIES: list[Country] = [
    Country(name="Chile", slug="chile", iso2="CL"),
    Country(name="Argentina", slug="argentina", iso2="AR"),
    Country(name="México", slug="mexico", iso2="MX"),
    Country(name="Colombia", slug="colombia", iso2="CO"),
    Country(name="España", slug="espana", iso2="ES"),
]

# "EU" is not an ISO 3166 code; the Schengen entry never matches an overlay.
DESTINATION_COUNTRIES: list[Country] = [
    Country(name="Estados Unidos", slug="estados-unidos", iso2="US"),
    Country(name="Canadá", slug="canada", iso2="CA"),
    Country(name="México", slug="mexico", iso2="MX"),
    Country(name="Brasil", slug="brasil", iso2="BR"),
    Country(name="Reino Unido", slug="reino-unido", iso2="GB"),
    Country(name="Japón", slug="japon", iso2="JP"),
    Country(name="Australia", slug="australia", iso2="AU"),
    Country(name="China", slug="china", iso2="CN"),
    Country(name="Turquía", slug="turquia", iso2="TR"),
    Country(name="Espacio Schengen", slug="schengen", iso2="EU"),
]


def find_country(slug: str) -> Country | None:
    for country in ORIGIN_COUNTRIES + DESTINATION_COUNTRIES:
        if country.slug == slug:
            return country
    return None
