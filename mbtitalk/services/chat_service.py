"""채팅방 목록 (채팅 API 연동 전까지 고정 데이터)"""

from typing import List, Optional

from mbtitalk.models.chat import ChatRoom

# TODO: 채팅방 목록 API가 생기면 백엔드 조회로 교체
PLACEHOLDER_CHAT_ROOMS: List[ChatRoom] = [
    ChatRoom(
        id="room_1",
        partner_mbti="ENFP",
        last_message="안녕하세요! 반가워요",
        last_message_time="방금",
        unread_count=2,
    ),
    ChatRoom(
        id="room_2",
        partner_mbti="INTJ",
        last_message="오늘 날씨가 좋네요",
        last_message_time="5분 전",
        unread_count=0,
    ),
]


def list_chat_rooms(user_id: str) -> List[ChatRoom]:
    return list(PLACEHOLDER_CHAT_ROOMS)


def get_chat_room(user_id: str, room_id: str) -> Optional[ChatRoom]:
    for room in list_chat_rooms(user_id):
        if room.id == room_id:
            return room
    return None
