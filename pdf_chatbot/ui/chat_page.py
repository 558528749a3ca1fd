"""NiceGUI chat page with PDF upload."""

from nicegui import events, ui

from pdf_chatbot.completion.client import CompletionClient
from pdf_chatbot.models.schemas import Message, Sender
from pdf_chatbot.parsing.extractors import get_pdf_extractor
from pdf_chatbot.parsing.pdf_parser import PDF_MEDIA_TYPE
from pdf_chatbot.session.conversation import ConversationController
from pdf_chatbot.session.state import ChatSession
from pdf_chatbot.session.upload import UploadController
from pdf_chatbot.ui.view_model import UPLOAD_LABEL, build_view

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: linear-gradient(180deg, #3b82f6 0%, #ffffff 60%); min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .message-user {
        background: #dbeafe;
        color: #1e40af;
        border-radius: 18px 18px 4px 18px;
    }

    .message-ai {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-error {
        background: #fee2e2;
        color: #991b1b;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #3b82f6;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .message-ai pre { margin: 0.5rem 0; }
    .message-ai code { font-family: 'Menlo', 'Monaco', monospace; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page.

    Each visit gets its own session and controllers; the page only renders
    session state and forwards user actions.
    """
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    uploads = UploadController(session, get_pdf_extractor())
    conversation = ConversationController(session, CompletionClient())

    scroll_area: ui.scroll_area
    messages_container: ui.column
    uploader: ui.upload
    upload_btn: ui.button
    input_field: ui.input
    send_btn: ui.button

    def render_message(msg: Message) -> None:
        is_user = msg.sender == Sender.USER
        align = "justify-end" if is_user else "justify-start"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[75%] gap-1"):
                if is_user:
                    with ui.element("div").classes("px-4 py-3 message-user"):
                        ui.label(msg.text).classes("text-sm whitespace-pre-wrap")
                else:
                    with ui.element("div").classes("px-4 py-3 message-ai"):
                        ui.markdown(msg.text).classes("text-sm leading-relaxed")
                ui.label(msg.timestamp.strftime("%I:%M %p")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def render_error(error: str) -> None:
        with ui.row().classes("w-full justify-start"):
            with ui.row().classes("message-error px-4 py-3 items-center gap-2"):
                ui.icon("error_outline").classes("text-lg")
                ui.label(error).classes("text-sm")

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start"):
            with ui.row().classes("message-ai px-4 py-3 items-center gap-2"):
                with ui.row().classes("gap-1"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")
                ui.label("Typing...").classes("text-sm text-gray-500 italic")

    def render() -> None:
        view = build_view(session)
        messages_container.clear()
        with messages_container:
            if view.is_empty:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("picture_as_pdf").classes("text-5xl text-gray-300")
                    ui.label("Upload a PDF and ask about it").classes("text-lg text-gray-400")
            for msg in view.messages:
                render_message(msg)
            if view.error:
                render_error(view.error)
            if view.typing:
                render_typing_indicator()

        upload_btn.set_enabled(view.upload_enabled)
        upload_btn.set_text(view.upload_label)
        send_btn.set_enabled(view.send_enabled)
        scroll_area.scroll_to(percent=1.0)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        # Allow the same file to be picked again
        uploader.reset()
        await uploads.submit_upload(e.file)

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or session.is_typing:
            return
        input_field.value = ""
        await conversation.send_message(text)

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-2xl mx-auto app-container gap-0").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full bg-blue-500 px-5 py-4 items-center gap-3"):
            ui.icon("picture_as_pdf").classes("text-white text-3xl")
            ui.label("PDF-Powered Chatbot").classes("text-lg font-semibold text-white")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area:
            messages_container = ui.column().classes("w-full p-5 gap-4")

        # Upload + input
        with ui.column().classes("w-full p-4 gap-3 bg-white border-t"):
            uploader = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props(f'accept="{PDF_MEDIA_TYPE}"')
                .classes("hidden")
            )
            upload_btn = ui.button(
                UPLOAD_LABEL,
                icon="upload",
                on_click=lambda: uploader.run_method("pickFiles"),
            ).props("unelevated color=grey-8")

            with ui.row().classes("w-full gap-3 items-center"):
                input_field = (
                    ui.input(placeholder="Ask something...")
                    .props("outlined dense")
                    .classes("flex-grow")
                    .on("keydown.enter", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=primary"
                )

    session.subscribe(render)
    render()


def main() -> None:
    ui.run(title="PDF Chatbot", port=8080, reload=False)


if __name__ in {"__main__", "__mp_main__"}:
    main()
