from log_reader.cli import cli

if __name__ == "__main__":
    cli()
