from pydantic import BaseModel, ConfigDict, Field

# --- Raw PokeAPI payload (Internal Contract) ---
# Only the fields we read are declared; everything else in the payload is ignored.

class ArtworkSprite(BaseModel):
    front_default: str | None = None

class OtherSprites(BaseModel):
    official_artwork: ArtworkSprite = Field(alias="official-artwork")

class Sprites(BaseModel):
    other: OtherSprites

class TypeRef(BaseModel):
    name: str

class TypeSlot(BaseModel):
    type: TypeRef

class PokemonData(BaseModel):
    id: int
    name: str
    sprites: Sprites
    types: list[TypeSlot]
    height: int  # decimetres
    weight: int  # hectograms
    base_experience: int | None = None


# Model for the single Pokemon responses (random and by id)
class PokemonResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    image: str | None
    types: list[str]
    height: float
    weight: float
    # snake_case in Python, camelCase in the JSON response
    base_experience: int | None = Field(default=None, alias="baseExperience")

# Narrower projection used by the list endpoint
class PokemonTableEntry(BaseModel):
    id: int
    name: str
    types: list[str]
    height: float

# Per-item error marker, only returned by the list endpoint in "partial" mode
class BatchItemError(BaseModel):
    id: int
    error: str

class HealthResponse(BaseModel):
    status: str

class ErrorResponse(BaseModel):
    error: str
