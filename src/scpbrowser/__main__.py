from scpbrowser.cli import app

app(prog_name="scpbrowser")
