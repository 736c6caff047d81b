"""
공통 페이지 레이아웃
- 상단 내비게이션, 공통 스타일
- 초기 상태 JSON 삽입 헬퍼
"""

import html
import json
from typing import Any, Optional

BASE_STYLE = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body {
    font-family: 'Pretendard', 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
    background: linear-gradient(135deg, #fdf2f8 0%, #f5f3ff 100%);
    min-height: 100vh;
    color: #1f2937;
}
a { color: inherit; text-decoration: none; }
.nav {
    display: flex; justify-content: space-between; align-items: center;
    max-width: 42rem; margin: 0 auto; padding: 16px 20px;
}
.nav .logo { font-weight: 800; font-size: 20px; color: #a855f7; }
.nav .links a { margin-left: 14px; font-size: 14px; color: #6b7280; }
.nav .links a:hover { color: #a855f7; }
.container { max-width: 42rem; margin: 0 auto; padding: 0 20px 40px; }
.card {
    background: white; border-radius: 24px; box-shadow: 0 10px 25px rgba(0,0,0,0.06);
    overflow: hidden; margin-bottom: 24px;
}
.card-header { padding: 16px 24px; color: white; font-weight: 700; display: flex; justify-content: space-between; align-items: center; }
.card-body { padding: 24px; }
.grad-pink { background: linear-gradient(90deg, #f472b6, #c084fc); }
.grad-amber { background: linear-gradient(90deg, #fbbf24, #fb923c); }
.grad-indigo { background: linear-gradient(90deg, #6366f1, #a855f7); }
.grad-purple { background: linear-gradient(90deg, #a855f7, #ec4899); }
.btn {
    display: block; width: 100%; padding: 14px; border: none; border-radius: 9999px;
    font-size: 16px; font-weight: 600; cursor: pointer; text-align: center; color: white;
    background: linear-gradient(90deg, #f472b6, #c084fc);
}
.btn:disabled { opacity: 0.5; cursor: not-allowed; }
.btn.gray { background: #e5e7eb; color: #374151; }
.btn-row { display: flex; gap: 12px; }
.btn-row .btn { flex: 1; }
.muted { color: #9ca3af; font-size: 13px; }
.center { text-align: center; }
.error { color: #ef4444; font-size: 14px; margin-bottom: 12px; }
.alert { padding: 14px; border-radius: 12px; margin-bottom: 16px; font-size: 14px; }
.alert.warn { background: #fef3c7; color: #b45309; }
.alert.error { background: #fee2e2; color: #dc2626; }
.bar { height: 24px; background: #f3f4f6; border-radius: 9999px; overflow: hidden; display: flex; }
.bar .left { background: linear-gradient(90deg, #f472b6, #ec4899); color: white; font-size: 12px; font-weight: 700; display: flex; align-items: center; justify-content: center; }
.bar .right { background: linear-gradient(90deg, #c084fc, #a855f7); color: white; font-size: 12px; font-weight: 700; display: flex; align-items: center; justify-content: center; }
.badge { display: inline-block; padding: 2px 8px; border-radius: 9999px; font-size: 12px; }
.badge.open { background: #dcfce7; color: #16a34a; }
.badge.closed { background: #f3f4f6; color: #6b7280; }
.row { display: flex; justify-content: space-between; align-items: center; padding: 16px; background: #f9fafb; border-radius: 12px; margin-bottom: 12px; }
.spinner {
    width: 32px; height: 32px; border: 3px solid #e9d5ff; border-top-color: #a855f7;
    border-radius: 50%; animation: spin 1s linear infinite; display: inline-block;
}
@keyframes spin { 0% { transform: rotate(0deg); } 100% { transform: rotate(360deg); } }
"""


def e(value: Any) -> str:
    """HTML 이스케이프 (None은 빈 문자열)"""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def embed_json(value: Any) -> str:
    """<script> 안에 넣을 JSON (</script> 종료 방지)"""
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


def render_nav(context=None) -> str:
    """상단 내비게이션"""
    if context is not None and context.is_logged_in:
        account_link = '<a href="/mypage">마이페이지</a>'
    else:
        account_link = '<a href="/login">로그인</a>'
    return f"""
    <nav class="nav">
        <a class="logo" href="/">mbtitalk</a>
        <div class="links">
            <a href="/community/balance">밸런스 게임</a>
            <a href="/chat">채팅</a>
            <a href="/mbti-test">MBTI 검사</a>
            {account_link}
        </div>
    </nav>
    """


def render_page(title: str, body: str, context=None, script: str = "", style: Optional[str] = None) -> str:
    """전체 HTML 문서 생성"""
    return f"""
    <!DOCTYPE html>
    <html lang="ko">
    <head>
        <meta charset="UTF-8">
        <title>{e(title)} - mbtitalk</title>
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <style>{BASE_STYLE}{style or ""}</style>
    </head>
    <body>
        {render_nav(context)}
        <main class="container">
            {body}
        </main>
        <script>{script}</script>
    </body>
    </html>
    """
