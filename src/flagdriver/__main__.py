from flagdriver.cli import app

app(prog_name="flagdriver")
