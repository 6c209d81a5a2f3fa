from tines_sdk.cli.cli_app import run

if __name__ == "__main__":
    run()
