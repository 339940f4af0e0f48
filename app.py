import gradio as gr

from line_chopper.config import DEFAULT_EXPRESSION, DEFAULT_FIELD_SEPARATOR, DEFAULT_TEMPLATE
from line_chopper.handlers import (
    describe_pipeline_handler,
    export_data_handler,
    load_text_handler,
    preview_handler,
)

# --- UI Definition ---
with gr.Blocks(title="Line Chopper") as demo:
    gr.Markdown("# Line Chopper")
    gr.Markdown("Slice each line of a text file into named fields, then format them with a template or as JSON.")

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload Text File")
            status_msg = gr.Textbox(label="Status", interactive=False)
            line_count = gr.Textbox(label="Line Count", interactive=False)
            input_text = gr.Textbox(label="Input Lines", lines=12, placeholder="Paste lines here or upload a file")

        # Right Panel: Expression & Output Builder
        with gr.Column(scale=1):
            gr.Markdown("### 2. Parse Expression")
            expression = gr.Textbox(
                label="Parse Expression",
                value=DEFAULT_EXPRESSION,
                info="Names alternate with terminators: 10 (absolute), +3 (relative), \",\" (delimiter), or another name.",
            )
            with gr.Row():
                delimiter = gr.Textbox(label="Default Field Delimiter", value=DEFAULT_FIELD_SEPARATOR)
                no_trim = gr.Checkbox(label="Do not trim spaces", value=False)
            pipeline_table = gr.Dataframe(
                headers=["Kind", "Name", "Until", "Skip All"],
                datatype=["str", "str", "str", "bool"],
                col_count=(4, "fixed"),
                interactive=False,
                label="Compiled Choppers",
            )

            gr.Markdown("### 3. Output")
            output = gr.Textbox(
                label="Output Expression",
                value=DEFAULT_TEMPLATE,
                info="'json' for an array of objects, or a template such as {{ .name }}.",
            )
            no_newline = gr.Checkbox(label="No newline after each line", value=False)

            gr.Markdown("### 4. Export")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="output")
            load_preview_btn = gr.Button("Load Preview")
            export_btn = gr.Button("Export Data", variant="primary")
            download_output = gr.File(label="Download Result")
            rendered_preview = gr.Textbox(label="Rendered Preview (first 3 lines)", interactive=False)
            record_preview = gr.JSON(label="Fields Preview (first 3 lines)")

    file_input.upload(
        fn=load_text_handler,
        inputs=[file_input],
        outputs=[input_text, status_msg, line_count],
    )

    for trigger in (expression.change, delimiter.change, no_trim.change):
        trigger(
            fn=describe_pipeline_handler,
            inputs=[expression, output, no_trim, delimiter],
            outputs=[pipeline_table, status_msg],
        )

    load_preview_btn.click(
        fn=preview_handler,
        inputs=[input_text, expression, output, no_trim, delimiter, no_newline],
        outputs=[record_preview, rendered_preview, status_msg],
    )

    export_btn.click(
        fn=export_data_handler,
        inputs=[input_text, expression, output, no_trim, delimiter, no_newline, output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    demo.launch()
