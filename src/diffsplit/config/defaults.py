"""Starter .diffsplit.toml template."""

DEFAULT_TOML = """\
# diffsplit configuration
version = "1.0"

[split]
strip = "auto"            # "auto" or number of leading path components to drop
hide_linenum = false      # mask start line numbers in @@ / @@@ hunk headers
skip_header = false       # omit diff/index/---/+++ lines from each output file
binary_list = "binary_files.txt"
# exclude = ["*.lock", "vendor/*"]

[parse]
extended_headers = false  # accept git "new file mode", "rename from", ... lines

[output]
format = "terminal"       # terminal | json
show_summary = true
"""
