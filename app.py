"""Wuziqi: Gradio web app entry point."""

import logging

import gradio as gr

from wuziqi.ui.board_component import BOARD_CLICK_JS
from wuziqi.ui.play_tab import build_play_tab

logging.basicConfig(level=logging.INFO)

with gr.Blocks(title="Wuziqi") as demo:
    gr.Markdown("# Wuziqi")
    gr.Markdown("Connected five against the computer: 15x15 board, 5 in a row to win.")

    with gr.Tab("Play"):
        build_play_tab()

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    demo.launch(theme=gr.themes.Soft())
