"""프로필 편집 테스트"""

from unittest.mock import AsyncMock

import pytest

from conftest import make_backend_client
from mbtitalk.api_client import BackendAPIError
from mbtitalk.auth.middleware import AuthContext
from mbtitalk.models.backend import ProfileUpdateRequest
from mbtitalk.models.mbti import InvalidMbtiError
from mbtitalk.models.user import Gender, Profile
from mbtitalk.services.profile_service import (
    SAVE_FAILED,
    SELECTION_REQUIRED,
    ProfileEditor,
    ProfileValidationError,
)


class TestSelection:
    def test_load_existing_profile(self):
        editor = ProfileEditor(Profile(mbti="ENTP", gender=Gender.MALE))
        assert editor.letters == ["E", "N", "T", "P"]
        assert editor.gender == Gender.MALE
        assert editor.is_complete

    def test_empty_profile_has_no_selection(self):
        editor = ProfileEditor(Profile())
        assert editor.letters == [None, None, None, None]
        assert not editor.is_complete
        assert editor.selected_mbti is None

    def test_select_letter_replaces_axis_choice(self):
        editor = ProfileEditor()
        editor.select_letter(0, "e")
        editor.select_letter(0, "I")
        assert editor.letters[0] == "I"

    def test_select_letter_rejects_wrong_axis(self):
        editor = ProfileEditor()
        with pytest.raises(InvalidMbtiError):
            editor.select_letter(0, "N")
        with pytest.raises(InvalidMbtiError):
            editor.select_letter(4, "E")

    def test_select_letters_is_all_or_nothing(self):
        editor = ProfileEditor(Profile(mbti="INFJ", gender=Gender.FEMALE))

        with pytest.raises(InvalidMbtiError):
            editor.select_letters(["E", "S", "X", "P"])
        assert editor.letters == ["I", "N", "F", "J"]

        editor.select_letters(["e", None, "t", "p"])
        assert editor.letters == ["E", None, "T", "P"]


class TestSave:
    @pytest.mark.asyncio
    async def test_incomplete_selection_skips_network(self):
        """미선택 항목이 있으면 백엔드를 호출하지 않습니다."""
        client = make_backend_client()
        context = AuthContext(client)
        editor = ProfileEditor()
        editor.start_editing(Profile())
        for axis, letter in enumerate("INF"):
            editor.select_letter(axis, letter)
        editor.select_gender(Gender.FEMALE)

        with pytest.raises(ProfileValidationError) as exc_info:
            await editor.save(client, context)

        assert str(exc_info.value) == SELECTION_REQUIRED
        client.update_profile.assert_not_awaited()
        assert editor.is_editing

    @pytest.mark.asyncio
    async def test_missing_gender_skips_network(self):
        client = make_backend_client()
        editor = ProfileEditor(Profile(mbti="INFJ"))

        with pytest.raises(ProfileValidationError):
            await editor.save(client, AuthContext(client))
        client.update_profile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_save_refreshes_context(self):
        """저장 성공 시 인증 컨텍스트를 다시 조회하고 편집을 종료합니다."""
        client = make_backend_client(mbti="ISTP", gender=Gender.MALE)
        context = AuthContext(client)
        editor = ProfileEditor()
        editor.start_editing(Profile())
        for axis, letter in enumerate("ISTP"):
            editor.select_letter(axis, letter)
        editor.select_gender(Gender.MALE)

        assert await editor.save(client, context)

        client.update_profile.assert_awaited_once_with(ProfileUpdateRequest(mbti="ISTP", gender=Gender.MALE))
        client.check_auth_status.assert_awaited_once()
        assert context.profile.mbti == "ISTP"
        assert not editor.is_editing
        assert not editor.is_saving

    @pytest.mark.asyncio
    async def test_save_failure_keeps_editing(self):
        client = make_backend_client()
        client.update_profile = AsyncMock(side_effect=BackendAPIError("bad gateway", 502))
        context = AuthContext(client)
        editor = ProfileEditor()
        editor.start_editing(Profile(mbti="INFJ", gender=Gender.FEMALE))

        assert not await editor.save(client, context)

        assert editor.error == SAVE_FAILED
        assert editor.is_editing
        client.check_auth_status.assert_not_awaited()
