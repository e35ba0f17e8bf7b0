"""
Panel wire models.

These models define the exact shapes exchanged with the UniProxy API.
"""

from typing import Dict, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictStr

MAX_ACCOUNT_ID = 0xFFFFFFFF


class PanelUser(BaseModel):
    """One entry of the panel's user list."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    uuid: StrictStr = Field(..., description="Credential presented by the client")
    id: int = Field(..., ge=0, le=MAX_ACCOUNT_ID, description="Panel account id")


class UserListResponse(BaseModel):
    """Response of GET /api/v1/server/UniProxy/user."""

    model_config = ConfigDict(extra="ignore")

    users: List[PanelUser]


class TrafficReport(RootModel[Dict[str, Tuple[str, str]]]):
    """
    Body of POST /api/v1/server/UniProxy/push.

    Maps the account id (decimal string) to ``[download, upload]``, both
    serialized as decimal strings.
    """

    @classmethod
    def from_totals(cls, totals: Mapping[int, Tuple[int, int]]) -> "TrafficReport":
        return cls(
            {
                str(account_id): (str(download), str(upload))
                for account_id, (download, upload) in totals.items()
            }
        )

    def to_payload(self) -> Dict[str, List[str]]:
        """JSON-ready dict; tuples become two-element arrays."""
        return {key: list(value) for key, value in self.root.items()}
