"""Five in a Row: Gradio web app entry point."""

import logging

import gradio as gr

from fiveinrow.ui.board_component import BOARD_CLICK_JS
from fiveinrow.ui.play_tab import build_play_tab

with gr.Blocks(title="Five in a Row") as demo:
    gr.Markdown("# Five in a Row")
    gr.Markdown("13x13 board, 5 in a row to win. Black moves first.")

    with gr.Tab("Play"):
        build_play_tab()

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    demo.launch(theme=gr.themes.Soft())
