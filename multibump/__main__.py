from multibump.cli import cli

cli(prog_name="multibump")
