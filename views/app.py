from __future__ import annotations

import os

import gradio as gr

from controllers.data_paths import DataPaths
from views.tabs import loop_tracer


def main() -> None:
    paths = DataPaths.from_data_dir()
    paths.ensure_directories()

    with gr.Blocks(title="Pipe Loop Tracer") as demo:
        with gr.Tabs():
            with gr.Tab("Loop Tracer"):
                loop_tracer.render(data_paths=paths)

    demo.launch(
        server_name=os.getenv("GRADIO_SERVER_NAME", "0.0.0.0"),
        server_port=int(os.getenv("GRADIO_SERVER_PORT", "7860")),
    )


if __name__ == "__main__":
    main()
