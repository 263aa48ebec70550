"""Entry point for `python -m claude_launchpad`."""


def main():
    from claude_launchpad.cli import main as run
    run()


if __name__ == "__main__":
    main()
