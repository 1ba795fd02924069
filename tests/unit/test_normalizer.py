import copy

import pytest
from app.clients.pokeapi_client import MalformedUpstreamData
from app.models import PokemonResponse, PokemonTableEntry
from app.services.normalizer import normalize_pokemon, to_table_entry


MOCK_BULBASAUR = {
    "id": 1,
    "name": "bulbasaur",
    "height": 7,
    "weight": 69,
    "base_experience": 64,
    "abilities": [{"ability": {"name": "overgrow"}}],  # ignored
    "sprites": {
        "front_default": "https://example.test/sprites/1.png",
        "other": {
            "official-artwork": {"front_default": "https://example.test/artwork/1.png"}
        },
    },
    "types": [
        {"slot": 1, "type": {"name": "grass"}},
        {"slot": 2, "type": {"name": "poison"}},
    ],
}


def test_known_fixture_converts_units_exactly():
    """height=7 dm and weight=69 hg must come out as 0.7 m and 6.9 kg."""
    result = normalize_pokemon(MOCK_BULBASAUR)

    assert isinstance(result, PokemonResponse)
    assert result.id == 1
    assert result.name == "bulbasaur"
    assert result.height == 0.7
    assert result.weight == 6.9
    assert result.base_experience == 64
    assert result.image == "https://example.test/artwork/1.png"

def test_types_keep_upstream_order():
    payload = copy.deepcopy(MOCK_BULBASAUR)
    payload["types"] = [
        {"slot": 1, "type": {"name": "poison"}},
        {"slot": 2, "type": {"name": "flying"}},
        {"slot": 3, "type": {"name": "grass"}},
    ]

    result = normalize_pokemon(payload)

    assert result.types == ["poison", "flying", "grass"]

def test_missing_base_experience_is_null():
    payload = copy.deepcopy(MOCK_BULBASAUR)
    del payload["base_experience"]

    assert normalize_pokemon(payload).base_experience is None

def test_null_artwork_is_allowed():
    """The artwork key can be present with a null value."""
    payload = copy.deepcopy(MOCK_BULBASAUR)
    payload["sprites"]["other"]["official-artwork"]["front_default"] = None

    assert normalize_pokemon(payload).image is None

@pytest.mark.parametrize("path", [
    ("sprites",),
    ("sprites", "other"),
    ("sprites", "other", "official-artwork"),
])
def test_missing_artwork_path_raises_malformed(path):
    """Any missing key along sprites.other["official-artwork"] is a malformed payload."""
    payload = copy.deepcopy(MOCK_BULBASAUR)
    node = payload
    for key in path[:-1]:
        node = node[key]
    del node[path[-1]]

    with pytest.raises(MalformedUpstreamData) as excinfo:
        normalize_pokemon(payload)

    assert excinfo.value.status_code == 500
    assert path[0] in excinfo.value.detail

def test_missing_height_raises_malformed():
    payload = copy.deepcopy(MOCK_BULBASAUR)
    del payload["height"]

    with pytest.raises(MalformedUpstreamData) as excinfo:
        normalize_pokemon(payload)

    assert "height" in excinfo.value.detail

def test_non_object_payload_raises_malformed():
    with pytest.raises(MalformedUpstreamData):
        normalize_pokemon(["not", "a", "pokemon"])

def test_response_serializes_base_experience_in_camel_case():
    dumped = normalize_pokemon(MOCK_BULBASAUR).model_dump(by_alias=True)

    assert dumped["baseExperience"] == 64
    assert "base_experience" not in dumped

def test_table_entry_drops_image_weight_and_experience():
    result = to_table_entry(normalize_pokemon(MOCK_BULBASAUR))

    assert isinstance(result, PokemonTableEntry)
    assert result.model_dump() == {
        "id": 1,
        "name": "bulbasaur",
        "types": ["grass", "poison"],
        "height": 0.7,
    }
