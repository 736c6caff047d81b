"""
MBTI 검사 뷰 라우터
- 검사 소개 → 채팅형 문답 → 결과
- 대화 진행은 /api/mbti-test 호출로 처리
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..auth.middleware import AuthContext, get_auth_context
from ..config_manager import config_manager
from ..services.mbti_test_service import LOGIN_REQUIRED
from ..session import session_manager
from .layout import embed_json, render_page

logger = logging.getLogger(__name__)
mbti_test_views_router = APIRouter()

MBTI_TEST_STYLE = """
.chat-box { height: 420px; overflow-y: auto; padding: 16px; background: #f9fafb; border-radius: 16px; margin-bottom: 16px; }
.msg { max-width: 80%; padding: 12px 16px; border-radius: 16px; margin-bottom: 10px; line-height: 1.6; white-space: pre-line; font-size: 14px; }
.msg.assistant { background: white; box-shadow: 0 2px 6px rgba(0,0,0,0.05); }
.msg.user { background: linear-gradient(90deg, #a855f7, #ec4899); color: white; margin-left: auto; }
.progress { height: 8px; background: #f3f4f6; border-radius: 9999px; overflow: hidden; margin: 8px 0 16px; }
.progress div { height: 100%; background: linear-gradient(90deg, #6366f1, #a855f7); transition: width 0.3s; }
.answer-row { display: flex; gap: 8px; }
.answer-row input { flex: 1; padding: 12px 16px; border: 1px solid #e5e7eb; border-radius: 9999px; font-size: 14px; }
.answer-row .btn { width: auto; padding: 12px 20px; }
.hidden { display: none; }
"""

MBTI_TEST_SCRIPT = """
let testState = initialState;
let resultTimer = null;

function escapeHtml(text) {
    const div = document.createElement('div');
    div.textContent = text;
    return div.innerHTML;
}

function render() {
    const started = testState && testState.is_started;
    document.getElementById('introSection').classList.toggle('hidden', !!started);
    document.getElementById('chatSection').classList.toggle('hidden', !started);
    if (!started) return;

    document.getElementById('phaseText').textContent = testState.phase_text;
    document.getElementById('progressBar').style.width = testState.progress + '%';

    const box = document.getElementById('chatBox');
    box.innerHTML = testState.messages.map(m =>
        `<div class="msg ${m.role}">${escapeHtml(m.content)}</div>`
    ).join('');
    if (testState.is_loading) {
        box.innerHTML += '<div class="msg assistant"><div class="spinner" style="width:16px;height:16px;"></div></div>';
    }
    box.scrollTop = box.scrollHeight;

    const errorEl = document.getElementById('testError');
    errorEl.textContent = testState.error || '';

    const locked = testState.is_completed || testState.is_loading;
    document.getElementById('answerInput').disabled = locked;
    document.getElementById('answerButton').disabled = locked;
    document.getElementById('answerRow').classList.toggle('hidden', testState.is_completed);

    const resultCard = document.getElementById('resultCard');
    if (testState.mbti_result) {
        document.getElementById('resultMbti').textContent = testState.mbti_result;
        resultCard.classList.remove('hidden');
    } else {
        resultCard.classList.add('hidden');
    }

    if (testState.is_completed && !testState.mbti_result) {
        waitForResult();
    }
}

async function postJson(url, body) {
    const response = await fetch(url, {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: body ? JSON.stringify(body) : null
    });
    if (response.status === 401) {
        window.location.href = '/login?next=' + encodeURIComponent('/mbti-test');
        return null;
    }
    return await response.json();
}

async function startTest() {
    const button = document.getElementById('startButton');
    button.disabled = true;
    try {
        const data = await postJson('/api/mbti-test/start');
        if (!data) return;
        if (data.success) {
            testState = data.state;
        } else {
            document.getElementById('startError').textContent = data.message;
        }
    } catch (error) {
        console.error('검사 시작 오류:', error);
    }
    button.disabled = false;
    render();
}

async function submitAnswer(event) {
    event.preventDefault();
    const input = document.getElementById('answerInput');
    const answer = input.value.trim();
    if (!answer || testState.is_loading || testState.is_completed) return;

    // 응답 대기 중 표시
    testState.messages.push({ role: 'user', content: answer });
    testState.is_loading = true;
    input.value = '';
    render();

    try {
        const data = await postJson('/api/mbti-test/answer', { answer: answer });
        if (!data) return;
        testState = data.state;
        if (!data.success) {
            // 실패한 답변은 입력창으로 되돌림
            input.value = answer;
            testState.error = data.message;
        }
    } catch (error) {
        console.error('답변 제출 오류:', error);
        testState.messages.pop();
        testState.is_loading = false;
        input.value = answer;
    }
    render();
}

function waitForResult() {
    if (resultTimer) return;
    resultTimer = setTimeout(async () => {
        resultTimer = null;
        try {
            const response = await fetch('/api/mbti-test/state');
            const data = await response.json();
            if (data.success) testState = data.state;
        } catch (error) {
            console.error('결과 조회 오류:', error);
        }
        render();
    }, 1000);
}

render();
"""


@mbti_test_views_router.get("/mbti-test", response_class=HTMLResponse)
async def mbti_test_page(context: AuthContext = Depends(get_auth_context)):
    """AI MBTI 검사"""
    total_questions = config_manager.mbti_test.total_questions

    if context.is_logged_in:
        test_state = session_manager.get_or_create_session(context.user_id).mbti_test.to_dict()
        start_action = '<button class="btn grad-indigo" id="startButton" onclick="startTest()">검사 시작하기</button>'
        login_notice = ""
    else:
        test_state = None
        start_action = '<a class="btn grad-indigo" href="/login?next=%2Fmbti-test">로그인하고 검사하기</a>'
        login_notice = f'<div class="alert warn">{LOGIN_REQUIRED} 로그인 후 검사를 시작할 수 있어요.</div>'

    body = f"""
    <div class="card" id="introSection">
        <div class="card-header grad-indigo"><span>🧠 AI MBTI 검사</span></div>
        <div class="card-body">
            {login_notice}
            <p style="font-size:18px; text-align:center; margin-bottom:12px;">AI와 대화하며 나의 MBTI를 알아보세요</p>
            <p class="muted center" style="margin-bottom:24px;">
                총 {total_questions}개 질문 · 약 10-15분 소요<br>
                정답은 없어요. 평소의 나를 떠올리며 편하게 답해주세요.
            </p>
            <p class="error center" id="startError"></p>
            {start_action}
        </div>
    </div>

    <div class="card hidden" id="chatSection">
        <div class="card-header grad-indigo">
            <span>🧠 AI MBTI 검사</span>
            <span id="phaseText" style="font-size:14px; font-weight:400;"></span>
        </div>
        <div class="card-body">
            <div class="progress"><div id="progressBar" style="width:0%;"></div></div>
            <div class="chat-box" id="chatBox"></div>
            <p class="error" id="testError"></p>
            <form class="answer-row" id="answerRow" onsubmit="submitAnswer(event)">
                <input id="answerInput" type="text" maxlength="2000" placeholder="답변을 입력하세요" autocomplete="off">
                <button class="btn" id="answerButton" type="submit">전송</button>
            </form>
            <div class="card hidden" id="resultCard" style="margin-top:24px; box-shadow:none; border:1px solid #e9d5ff;">
                <div class="card-body center">
                    <p class="muted">당신의 MBTI는</p>
                    <p id="resultMbti" style="font-size:36px; font-weight:800; color:#a855f7; margin:8px 0 24px;"></p>
                    <a class="btn" href="/matching">MBTI로 매칭하기</a>
                </div>
            </div>
        </div>
    </div>
    """

    script = f"const initialState = {embed_json(test_state)};\n{MBTI_TEST_SCRIPT}"
    return HTMLResponse(render_page("AI MBTI 검사", body, context, script=script, style=MBTI_TEST_STYLE))
