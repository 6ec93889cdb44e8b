import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

RoutePreference = Literal["fastest", "cheapest", "avoid-tolls"]


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- SCORING ---------------------


class DriverScoringModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    performance_weight: float = 40.0
    fatigue_weight: float = 30.0
    proximity_weight: float = 30.0
    max_rating: float = 5.0
    fatigue_cap_hours: float = 9.0  # hours beyond the cap score like the cap
    max_proximity: float = 100.0

    @field_validator("max_rating", "fatigue_cap_hours", "max_proximity")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


class VehicleScoringModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    efficiency_multiplier: float = 5.0
    good_penalty: float = 0.0
    needs_check_penalty: float = 15.0
    poor_penalty: float = 30.0


class RankingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # "identifier": equal scores fall back to candidate id order
    # "input_order": equal scores keep the order the source supplied
    tie_break: Literal["identifier", "input_order"] = "identifier"


class FuelCostModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    price_per_unit: float = 0.5  # base currency per unit of fuel
    exchange_rate: float = 83.5  # base currency -> display currency
    currency_symbol: str = "₹"

    @field_validator("price_per_unit", "exchange_rate")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


# ----------------- ACCESS ---------------------


class PermissionsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    modify_roles: frozenset[str] = frozenset({"dispatcher", "admin"})
    analytics_roles: frozenset[str] = frozenset({"admin"})
    settings_roles: frozenset[str] = frozenset({"admin"})

    @field_validator("modify_roles", "analytics_roles", "settings_roles")
    @classmethod
    def _lowercase(cls, v: frozenset[str]) -> frozenset[str]:
        # roles are compared on their lowercase name
        return frozenset(r.strip().lower() for r in v)


# ----------------- OPERATOR SETTINGS ---------------------


class FuelPriceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    state: str
    price: float

    @field_validator("state")
    @classmethod
    def _state_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("fuel price entries need a state")
        return v.strip()

    @field_validator("price")
    @classmethod
    def _price_positive(cls, v: float) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError("fuel price must be a positive number")
        return v


class SettingsModel(BaseModel):
    """Operator-editable settings. Display/config inputs only; scoring does not read them."""

    model_config = ConfigDict(extra="forbid")
    default_route_preference: RoutePreference = "fastest"
    max_driving_hours: float = 10.0
    fuel_prices_by_state: list[FuelPriceModel] = Field(
        default_factory=lambda: [FuelPriceModel(state="Delhi", price=96.72)]
    )
    enable_ai_recommendations: bool = True

    @field_validator("max_driving_hours")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if not isfinite(v) or v < 0:
            raise ValueError("max_driving_hours cannot be negative")
        return v


# ----------------- SIMULATED OUTCOMES ---------------------


class OutcomeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    seed: int = 0
    delayed_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    max_delivery_hours: float = Field(default=8.0, gt=0.0)


# ----------------- STORES ---------------------


class StoreMemoryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["memory"] = "memory"


class StoreJsonFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["json_file"] = "json_file"
    directory: str

    @field_validator("directory")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


StoreUnion = Annotated[StoreMemoryModel | StoreJsonFileModel, Field(discriminator="kind")]


# ----------------- PLANNING REQUEST ---------------------


class TripRequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    origin: str
    destination: str
    load_weight: float = Field(ge=0.0)  # kg
    load_volume: float = Field(ge=0.0)  # m³
    delivery_time_slot: str | None = None
    route_preference: RoutePreference | None = None  # None -> settings default

    @field_validator("origin", "destination")
    @classmethod
    def _required(cls, v: str, info: ValidationInfo) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} is required")
        return v.strip()


# ------------------------------------------------------------------


class AppModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "dispatch_planner"
    run_id: str = "local"
    account: str
    log: LogModel = LogModel()
    driver_scoring: DriverScoringModel = DriverScoringModel()
    vehicle_scoring: VehicleScoringModel = VehicleScoringModel()
    ranking: RankingModel = RankingModel()
    fuel: FuelCostModel = FuelCostModel()
    permissions: PermissionsModel = PermissionsModel()
    settings: SettingsModel = Field(default_factory=SettingsModel)
    outcomes: OutcomeModel = OutcomeModel()
    store: StoreUnion = Field(default_factory=StoreMemoryModel)

    @field_validator("account")
    @classmethod
    def _account_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("account is required")
        return v
