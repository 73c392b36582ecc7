import argparse
import logging
import sys

from keyconv.convert import to_pkcs8_pem

logger = logging.getLogger("to_pkcs8")


def read_input(path):
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, 'rb') as file:
        return file.read()


def write_output(path, pem_text):
    if path is None or path == "-":
        print(pem_text, end="")
        return
    with open(path, 'w', newline='\n') as file:
        file.write(pem_text)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Convert an EC (SEC1) or RSA (PKCS#1) private key PEM "
                                                 "to PKCS#8 PEM.")
    parser.add_argument("input", nargs="?", default=None, help="Path to the PEM file to convert (default: stdin)")
    parser.add_argument("-o", "--output", default=None, help="Path to write the PKCS#8 PEM to (default: stdout)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log what is being converted")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s - %(message)s')

    try:
        pem_text = read_input(args.input)
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read input: %s", e)
        return 1

    # Convert fully before touching the output so nothing partial is written
    try:
        result = to_pkcs8_pem(pem_text)
    except ValueError as e:
        logger.error("Conversion failed: %s", e)
        return 1

    try:
        write_output(args.output, result)
    except OSError as e:
        logger.error("Could not write output: %s", e)
        return 1
    if args.output not in (None, "-"):
        logger.info("PKCS#8 key written to %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
