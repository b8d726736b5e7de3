import random

from atlas import catalog
from atlas.models.theme import COLOR_TOKENS, ShadowStrength


class TestCatalog:
    def test_slugs(self):
        assert catalog.BUILT_IN_SLUGS == (
            "default",
            "ocean",
            "forest",
            "sunset",
            "lavender",
            "midnight",
            "monochrome",
        )

    def test_every_built_in_has_both_variants(self):
        for theme in catalog.list_built_ins():
            assert theme.is_built_in is True
            assert theme.supports_both_modes is True
            assert theme.id == 0
            assert theme.user_id is None
            for token in COLOR_TOKENS:
                assert getattr(theme, f"{token}_light")
                assert getattr(theme, f"{token}_dark")
                assert getattr(theme, token) == getattr(theme, f"{token}_light")

    def test_ocean_values(self):
        ocean = catalog.get_built_in("ocean")
        assert ocean.primary_light == "200 85% 50%"
        assert ocean.primary_dark == "200 85% 55%"
        assert ocean.radius == "0.75rem"

    def test_layout_fields(self):
        assert catalog.get_built_in("monochrome").shadow_strength == ShadowStrength.NONE
        assert catalog.get_built_in("midnight").shadow_strength == ShadowStrength.STRONG

    def test_unknown_slug(self):
        assert catalog.get_built_in("nope") is None

    def test_returns_copies(self):
        first = catalog.get_built_in("forest")
        first.primary_light = "0 0% 0%"
        assert catalog.get_built_in("forest").primary_light != "0 0% 0%"

        listed = catalog.list_built_ins()
        listed[0].name = "Changed"
        assert catalog.list_built_ins()[0].name == "Default"

    def test_random_built_in_is_uniform_choice(self):
        rng = random.Random(42)
        seen = {catalog.random_built_in(rng).slug for _ in range(200)}
        assert seen == set(catalog.BUILT_IN_SLUGS)

    def test_default_theme(self):
        assert catalog.default_theme().slug == catalog.DEFAULT_THEME_SLUG
