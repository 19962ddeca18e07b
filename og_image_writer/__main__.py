import fire

from og_image_writer.run import run


def main():
    """The main entry point for the command-line interface.

    This function uses the `fire` library to expose the `run` function from
    `og_image_writer.run` to the command line, so an image can be generated
    with `python -m og_image_writer "Hello" path/to/font.ttf --dest og.png`.
    """
    fire.Fire(run)


if __name__ == "__main__":
    main()
