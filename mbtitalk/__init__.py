"""
MBTI 기반 소셜 웹 프론트엔드
- 채팅 매칭, 밸런스 게임, AI MBTI 검사, 프로필 관리
"""

__version__ = "1.0.0"
