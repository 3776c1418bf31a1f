from __future__ import annotations

from collections.abc import Callable

import gradio as gr


ChoicesProvider = Callable[[], list[str]]


def file_selector(
    *,
    label: str,
    choices_provider: ChoicesProvider,
    refresh_label: str = "Refresh",
    preselect_first: bool = False,
) -> tuple[gr.Dropdown, gr.Button]:
    """Dropdown of stored grid files plus a button that re-lists them.

    Pasted text wins over the dropdown in the tracer tab, so nothing is
    preselected unless ``preselect_first`` is set.
    """

    choices = choices_provider()
    initial_value = choices[0] if choices and preselect_first else None
    dropdown = gr.Dropdown(
        label=label,
        choices=choices,
        value=initial_value,
        allow_custom_value=True,
    )
    refresh_button = gr.Button(refresh_label)

    def _refresh(current_value: str | None) -> gr.Dropdown:
        fresh = choices_provider()
        value = current_value if current_value in fresh else None
        return gr.update(choices=fresh, value=value)

    refresh_button.click(fn=_refresh, inputs=[dropdown], outputs=[dropdown])
    return dropdown, refresh_button


__all__ = ["file_selector"]
