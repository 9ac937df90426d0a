from golit.cli import cli

cli(prog_name="golit")
