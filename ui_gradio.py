# ui_gradio.py
import os
import requests
import gradio as gr
from dotenv import load_dotenv

from presentation import (
    LANGUAGES,
    SUGGESTED_QUESTIONS,
    TRANSLATIONS,
    conversation_history,
    is_greeting,
    loading_phases,
    weather_badge,
)

load_dotenv()

API_BASE = os.getenv("API_BASE", "http://localhost:8000").rstrip("/")
CHAT_URL = f"{API_BASE}/v1/chat"
TRANSCRIBE_URL = f"{API_BASE}/v1/transcribe"
DEFAULT_LANG = "ja"


def header(lang: str) -> str:
    t = TRANSLATIONS[lang]
    return f"# ✈️ {t['title']}\n{t['subtitle']}"


def call_backend(message: str, history: list, lang: str, badge: str):
    """
    Gradio callback, yields (textbox, chat history, weather badge, status) while
    the backend works through its phases.
    """
    t = TRANSLATIONS[lang]
    if not message or not message.strip():
        yield message, history, badge, ""
        return

    history = history + [{"role": "user", "content": message}]
    yield "", history, badge, f"_{t['weather']}_"

    payload = {"messages": conversation_history(history), "language": LANGUAGES[lang]}
    try:
        resp = requests.post(CHAT_URL, json=payload, timeout=120)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        history = history + [{"role": "assistant", "content": f"{t['error']}\n\n_{e}_"}]
        yield "", history, badge, ""
        return

    if data.get("weather"):
        badge = weather_badge(data["weather"])
    for phase in loading_phases(bool(data.get("weatherFetched")))[1:]:
        yield "", history, badge, f"_{t[phase]}_"

    if data.get("reply"):
        history = history + [{"role": "assistant", "content": data["reply"]}]
    yield "", history, badge, ""


def transcribe_audio(path: str, lang: str):
    if not path:
        return gr.update()
    with open(path, "rb") as f:
        files = {"file": (os.path.basename(path), f, "audio/wav")}
        try:
            resp = requests.post(TRANSCRIBE_URL, files=files, data={"language": lang}, timeout=60)
            resp.raise_for_status()
        except requests.RequestException as e:
            gr.Warning(f"Transcription failed: {e}")
            return gr.update()
    return resp.json().get("text", "")


def switch_language(lang: str, history: list):
    t = TRANSLATIONS[lang]
    # Only the untouched greeting is swapped; a running conversation is kept
    if not history or (len(history) == 1 and is_greeting(history[0])):
        history = [{"role": "assistant", "content": t["greeting"]}]
    return (
        header(lang),
        history,
        gr.update(placeholder=t["placeholder"]),
        gr.update(choices=SUGGESTED_QUESTIONS[lang], value=None),
    )


with gr.Blocks() as demo:
    title_md = gr.Markdown(header(DEFAULT_LANG))
    lang_radio = gr.Radio(choices=[("日本語", "ja"), ("English", "en")], value=DEFAULT_LANG, label="Language")
    weather_md = gr.Markdown("")

    chat = gr.Chatbot(
        type="messages",
        height=500,
        value=[{"role": "assistant", "content": TRANSLATIONS[DEFAULT_LANG]["greeting"]}],
    )
    status_md = gr.Markdown("")
    suggestions = gr.Radio(choices=SUGGESTED_QUESTIONS[DEFAULT_LANG], label="💡", value=None)
    with gr.Row():
        msg = gr.Textbox(label="", placeholder=TRANSLATIONS[DEFAULT_LANG]["placeholder"], scale=4)
        audio = gr.Audio(sources=["microphone"], type="filepath", label="🎤", scale=1)

    msg.submit(
        fn=call_backend,
        inputs=[msg, chat, lang_radio, weather_md],
        outputs=[msg, chat, weather_md, status_md],
    )
    suggestions.input(
        fn=call_backend,
        inputs=[suggestions, chat, lang_radio, weather_md],
        outputs=[msg, chat, weather_md, status_md],
    )
    audio.stop_recording(fn=transcribe_audio, inputs=[audio, lang_radio], outputs=[msg])
    lang_radio.change(
        fn=switch_language,
        inputs=[lang_radio, chat],
        outputs=[title_md, chat, msg, suggestions],
    )

if __name__ == "__main__":
    demo.launch()
