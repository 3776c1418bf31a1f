from __future__ import annotations

import gradio as gr

from controllers.data_paths import DataPaths
from controllers.loop_report import run_trace_for_ui
from controllers.settings import load_cell_size
from views.components import file_selector
from views.config import list_grids

SAMPLE_GRID = "\n".join(
    [
        "..F7.",
        ".FJ|.",
        "SJ.L7",
        "|F--J",
        "LJ...",
    ]
)


def render(*, data_paths: DataPaths) -> None:
    """Paste or pick a pipe map and trace the loop through its start tile."""

    gr.Markdown(
        "Paste a pipe map (`| - L J 7 F . S`, one row per line) or pick a stored "
        "grid from `data/grids/`. Pasted text takes precedence. The loop through "
        "`S` is traced, rendered, and summarized; the answer is the number of "
        "steps to the farthest loop tile."
    )

    with gr.Row():
        with gr.Column(scale=1):
            grid_input = gr.Textbox(
                label="Grid text",
                value=SAMPLE_GRID,
                lines=12,
                max_lines=200,
            )
            grid_selector, _ = file_selector(
                label="Or pick a stored grid",
                choices_provider=lambda: list_grids(data_paths),
                refresh_label="Refresh grid list",
            )
            cell_size_input = gr.Slider(
                label="Render cell size (px)",
                value=load_cell_size(),
                minimum=4,
                maximum=48,
                step=1,
            )
            run_button = gr.Button("Trace loop", variant="primary")
        with gr.Column(scale=1):
            answer_output = gr.Textbox(label="Farthest distance", interactive=False)
            render_preview = gr.Image(label="Loop Overlay", type="pil")
            summary_output = gr.JSON(label="Loop summary")
            status_output = gr.Markdown(value="")

    def _run_trace(grid_text: str | None, selected: str | None, cell_size: float):
        try:
            result = run_trace_for_ui(
                grid_text,
                selected,
                cell_size=cell_size,
                paths=data_paths,
            )
        except ValueError as exc:
            kind = getattr(exc, "kind", None)
            message = f"{kind}: {exc}" if kind else str(exc)
            raise gr.Error(message) from exc

        return result.answer, result.render_image, result.summary, result.status_message

    run_button.click(
        fn=_run_trace,
        inputs=[grid_input, grid_selector, cell_size_input],
        outputs=[answer_output, render_preview, summary_output, status_output],
        show_progress=True,
    )


__all__ = ["render"]
