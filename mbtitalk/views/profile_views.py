"""
프로필 뷰 라우터
- /profile: MBTI 4축 + 성별 선택 편집 화면
- /mypage: 내 정보 조회
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ..auth.middleware import AuthContext, auth_middleware, get_auth_context
from ..models.mbti import MBTI_AXES
from ..models.user import GENDER_ICONS, GENDER_LABELS, Gender
from ..services.profile_service import ProfileEditor
from ..session import session_manager
from .layout import e, embed_json, render_page

logger = logging.getLogger(__name__)
profile_views_router = APIRouter()

PROFILE_STYLE = """
.axis-row { display: flex; gap: 12px; margin-bottom: 12px; }
.toggle {
    flex: 1; padding: 16px; border-radius: 16px; border: 2px solid #e5e7eb; background: white;
    font-size: 20px; font-weight: 700; color: #6b7280; cursor: pointer;
}
.toggle.selected { border-color: #a855f7; background: #faf5ff; color: #a855f7; }
.section-title { font-weight: 700; margin: 24px 0 12px; }
"""

PROFILE_SCRIPT = """
function renderSelection() {
    document.querySelectorAll('.toggle[data-axis]').forEach(button => {
        const axis = Number(button.dataset.axis);
        button.classList.toggle('selected', editorState.letters[axis] === button.dataset.value);
    });
    document.querySelectorAll('.toggle[data-gender]').forEach(button => {
        button.classList.toggle('selected', editorState.gender === button.dataset.gender);
    });
    const mbti = editorState.letters.every(l => l) ? editorState.letters.join('') : '????';
    document.getElementById('selectedMbti').textContent = mbti;
}

function selectLetter(axis, letter) {
    editorState.letters[axis] = letter;
    renderSelection();
}

function selectGender(gender) {
    editorState.gender = gender;
    renderSelection();
}

async function saveProfile() {
    const button = document.getElementById('saveButton');
    button.disabled = true;
    try {
        const response = await fetch('/api/profile', {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ letters: editorState.letters, gender: editorState.gender })
        });
        if (response.status === 401) {
            window.location.href = '/login?next=' + encodeURIComponent('/profile');
            return;
        }
        const data = await response.json();
        if (data.success) {
            window.location.href = '/mypage';
            return;
        }
        alert(data.message);
    } catch (error) {
        console.error('프로필 저장 오류:', error);
        alert('프로필 저장에 실패했습니다.');
    }
    button.disabled = false;
}

renderSelection();
"""


def render_axis_toggles(editor: ProfileEditor) -> str:
    rows = []
    for axis, letters in enumerate(MBTI_AXES):
        buttons = "".join(
            f'<button type="button" class="toggle{" selected" if editor.letters[axis] == letter else ""}" '
            f'data-axis="{axis}" data-value="{letter}" onclick="selectLetter({axis}, \'{letter}\')">{letter}</button>'
            for letter in letters
        )
        rows.append(f'<div class="axis-row">{buttons}</div>')
    return "".join(rows)


def render_gender_toggles(editor: ProfileEditor) -> str:
    return "".join(
        f'<button type="button" class="toggle{" selected" if editor.gender == gender else ""}" '
        f'data-gender="{gender.value}" onclick="selectGender(\'{gender.value}\')">'
        f'{GENDER_ICONS[gender]} {GENDER_LABELS[gender]}</button>'
        for gender in Gender
    )


@profile_views_router.get("/profile", response_class=HTMLResponse)
async def profile_edit_page(request: Request, context: AuthContext = Depends(get_auth_context)):
    """프로필 편집"""
    redirect = auth_middleware.require_login_redirect(request, context)
    if redirect:
        return redirect

    editor = session_manager.get_or_create_session(context.user_id).profile_editor
    editor.start_editing(context.profile)

    notice = ""
    if not context.profile.has_mbti:
        notice = '<div class="alert warn">채팅과 매칭을 이용하려면 MBTI를 먼저 설정해주세요.</div>'

    body = f"""
    <div class="card">
        <div class="card-header grad-pink"><span>✏️ 프로필 설정</span></div>
        <div class="card-body">
            {notice}
            <p class="center muted">선택한 MBTI</p>
            <p class="center" id="selectedMbti" style="font-size:32px; font-weight:800; color:#a855f7; margin-bottom:8px;">
                {e(editor.selected_mbti or "????")}
            </p>
            <p class="section-title">MBTI</p>
            {render_axis_toggles(editor)}
            <p class="section-title">성별</p>
            <div class="axis-row">{render_gender_toggles(editor)}</div>
            <div class="btn-row" style="margin-top:24px;">
                <a class="btn gray" href="/mypage">취소</a>
                <button class="btn" id="saveButton" onclick="saveProfile()">저장하기</button>
            </div>
        </div>
    </div>
    """

    script = f"const editorState = {embed_json(editor.to_dict())};\n{PROFILE_SCRIPT}"
    return HTMLResponse(render_page("프로필 설정", body, context, script=script, style=PROFILE_STYLE))


@profile_views_router.get("/mypage", response_class=HTMLResponse)
async def mypage(request: Request, context: AuthContext = Depends(get_auth_context)):
    """마이페이지"""
    redirect = auth_middleware.require_login_redirect(request, context)
    if redirect:
        return redirect

    profile = context.profile
    mbti_display = e(profile.mbti) if profile.has_mbti else '<span class="muted">미설정</span>'

    body = f"""
    <div class="card">
        <div class="card-header grad-pink"><span>👤 마이페이지</span></div>
        <div class="card-body">
            <div class="row">
                <div><p class="muted">이메일</p><p style="font-weight:600;">{e(context.user.email) or "-"}</p></div>
            </div>
            <div class="row">
                <div><p class="muted">MBTI</p><p style="font-weight:700; font-size:20px; color:#a855f7;">{mbti_display}</p></div>
                <a href="/profile" style="color:#a855f7; font-size:14px;">변경</a>
            </div>
            <div class="row">
                <div><p class="muted">성별</p><p style="font-weight:600;">{profile.gender_icon} {e(profile.gender_label)}</p></div>
                <a href="/profile" style="color:#a855f7; font-size:14px;">변경</a>
            </div>
            <a class="btn grad-indigo" style="margin-top:24px;" href="/mbti-test">MBTI 다시 검사하기</a>
        </div>
    </div>
    """
    return HTMLResponse(render_page("마이페이지", body, context))
