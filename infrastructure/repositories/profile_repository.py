from typing import Any, Callable, Dict, List, Optional

from infrastructure.backend.errors import DataApiError
from use_cases.session_models import Profile, Role

PROFILE_COLUMNS = "id, email, full_name, phone, role, is_approved, is_blocked"


class ProfileRepository:
    def __init__(self, client, token_provider: Callable[[], Optional[str]]):
        self.client = client
        self._token = token_provider

    def fetch_profile(self, subject_id: str) -> Profile:
        row = self.client.select_one(
            "profiles",
            PROFILE_COLUMNS,
            filters={"id": subject_id},
            access_token=self._token(),
        )
        if row is None:
            raise DataApiError(f"No profile for subject {subject_id}", status=406)
        return Profile.from_row(row)

    def update_profile(self, subject_id: str, fields: Dict[str, Any]) -> None:
        self.client.update("profiles", {"id": subject_id}, fields, access_token=self._token())

    def list_bakers(self) -> List[Profile]:
        rows = self.client.select(
            "profiles",
            PROFILE_COLUMNS,
            filters={"role": Role.BAKER.value},
            order="full_name.asc",
            access_token=self._token(),
        )
        return [Profile.from_row(r) for r in rows]
