from cratedepth.cli import app


def main():
    """ Entrypoint when is installed via pip """
    app()


# Development mode
if __name__ == "__main__":
    main()
