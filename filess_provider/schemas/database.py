"""Pydantic schemas for the filess_database resource (configuration and state)."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class BillableItem(BaseModel):
    """One billable unit of a database plan."""

    billable_item_id: str = Field(..., description="Billable item ID")
    quantity: int = Field(..., description="Quantity of the billable item")

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> Dict[str, Any]:
        return {"billableItemId": self.billable_item_id, "quantity": self.quantity}


class DatabasePlan(BaseModel):
    """Database plan configuration."""

    billable_items: List[BillableItem] = Field(..., description="Set of billable items")

    model_config = ConfigDict(frozen=True)

    @field_validator("billable_items")
    @classmethod
    def _dedupe_items(cls, items: List[BillableItem]) -> List[BillableItem]:
        # Set semantics, first occurrence wins
        seen = set()
        unique = []
        for item in items:
            if item not in seen:
                seen.add(item)
                unique.append(item)
        return unique


class DatabaseConfig(BaseModel):
    """Desired configuration of a filess_database resource."""

    organization_slug: str = Field(..., description="Organization slug", json_schema_extra={"force_new": True})
    namespace_slug: str = Field(..., description="Namespace slug", json_schema_extra={"force_new": True})
    name: str = Field(..., description="Database name")
    description: str = Field("", description="Database description")
    engine_id: str = Field(..., description="Database engine ID", json_schema_extra={"force_new": True})
    region_id: str = Field(..., description="Region ID", json_schema_extra={"force_new": True})
    database_plan: DatabasePlan = Field(..., description="Database plan configuration", json_schema_extra={"force_new": True})
    ip_whitelist_ids: Optional[List[str]] = Field(None, description="List of IP whitelist IDs")
    ssh_key_ids: Optional[List[str]] = Field(None, description="List of SSH key IDs")
    tailscale_config_id: Optional[str] = Field(None, description="Tailscale config ID")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "organization_slug": "acme",
                "namespace_slug": "production",
                "name": "orders",
                "description": "Orders database",
                "engine_id": "1",
                "region_id": "3",
                "database_plan": {
                    "billable_items": [{"billable_item_id": "bi1", "quantity": 2}],
                },
            }
        }
    )

    @classmethod
    def force_new_fields(cls) -> List[str]:
        """Fields whose change requires destroying and recreating the database."""
        return [
            name
            for name, info in cls.model_fields.items()
            if isinstance(info.json_schema_extra, dict) and info.json_schema_extra.get("force_new")
        ]

    def requires_replacement(self, other: "DatabaseConfig") -> List[str]:
        """Return the force-new fields that differ between self and other."""
        return [
            name
            for name in self.force_new_fields()
            if getattr(self, name) != getattr(other, name)
        ]

    def to_create_payload(self) -> Dict[str, Any]:
        """Build the POST /api/v1/databases request body."""
        payload: Dict[str, Any] = {
            "organizationSlug": self.organization_slug,
            "namespaceSlug": self.namespace_slug,
            "engineId": self.engine_id,
            "regionId": self.region_id,
            "details": {
                "name": self.name,
                "description": self.description,
            },
            "databasePlanDetails": {
                "databasePlanBI": [item.to_payload() for item in self.database_plan.billable_items],
            },
        }

        # Optional attributes are sent only when set to a non-empty value
        if self.ip_whitelist_ids:
            payload["ipWhitelistIds"] = list(self.ip_whitelist_ids)
        if self.ssh_key_ids:
            payload["sshKeyIds"] = list(self.ssh_key_ids)
        if self.tailscale_config_id:
            payload["tailscaleConfigId"] = self.tailscale_config_id

        return payload


class DatabaseState(BaseModel):
    """
    Persisted state of a filess_database resource.

    An empty ``id`` means the database does not exist (never created,
    deleted, or gone from the backend).
    """

    id: str = Field("", description="Database ID")
    organization_slug: str = Field("", description="Organization slug")
    namespace_slug: str = Field("", description="Namespace slug")
    name: str = Field("", description="Database name")
    description: str = Field("", description="Database description")
    engine_id: str = Field("", description="Database engine ID")
    region_id: str = Field("", description="Region ID")
    database_plan: Optional[DatabasePlan] = Field(None, description="Database plan configuration")
    ip_whitelist_ids: Optional[List[str]] = Field(None, description="List of IP whitelist IDs")
    ssh_key_ids: Optional[List[str]] = Field(None, description="List of SSH key IDs")
    tailscale_config_id: Optional[str] = Field(None, description="Tailscale config ID")

    # Computed by the backend
    status: str = Field("", description="Database status", json_schema_extra={"computed": True})
    database_hostname: str = Field(
        "", description="Hostname for connecting to the database", json_schema_extra={"computed": True}
    )
    database_service_port: str = Field(
        "", description="Service port for connecting to the database", json_schema_extra={"computed": True}
    )
    database_username: str = Field(
        "", description="Database username to use when connecting", json_schema_extra={"computed": True}
    )
    database_password: SecretStr = Field(
        SecretStr(""),
        description="Database password to use when connecting",
        json_schema_extra={"computed": True, "sensitive": True},
    )
    stripe_checkout_url: str = Field(
        "", description="Stripe checkout URL to complete billing when required", json_schema_extra={"computed": True}
    )
    created_at: str = Field("", description="Database creation timestamp", json_schema_extra={"computed": True})

    model_config = ConfigDict(validate_assignment=True)

    @classmethod
    def from_config(cls, config: DatabaseConfig, database_id: str = "") -> "DatabaseState":
        return cls(id=database_id, **config.model_dump())

    @property
    def exists(self) -> bool:
        return bool(self.id)

    def clear_id(self) -> None:
        self.id = ""

    def export(self, show_secrets: bool = False) -> Dict[str, Any]:
        """Plain dict view; the password is masked unless show_secrets is set."""
        data = self.model_dump(mode="json")
        if show_secrets:
            data["database_password"] = self.database_password.get_secret_value()
        return data


def resource_schema() -> Dict[str, Dict[str, Any]]:
    """
    Attribute metadata for the filess_database resource.

    Returns:
        Mapping of attribute name to:
            - description: Attribute description
            - required: Must be set in configuration
            - optional: May be set in configuration
            - computed: Populated by the backend
            - force_new: Changing it requires replacement
            - sensitive: Must not be shown in plain output
    """
    schema: Dict[str, Dict[str, Any]] = {}

    for name, info in DatabaseConfig.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        schema[name] = {
            "description": info.description,
            "required": info.is_required(),
            "optional": not info.is_required(),
            "computed": False,
            "force_new": bool(extra.get("force_new")),
            "sensitive": False,
        }

    for name, info in DatabaseState.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        if name in schema or not extra.get("computed"):
            continue
        schema[name] = {
            "description": info.description,
            "required": False,
            "optional": False,
            "computed": True,
            "force_new": False,
            "sensitive": bool(extra.get("sensitive")),
        }

    return schema
