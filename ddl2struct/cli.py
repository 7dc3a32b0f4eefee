import argparse, logging, sys

from ddl2struct.cfg import CFG, load_config
from ddl2struct.errors import Ddl2StructError
from ddl2struct.extractor import extract_table
from ddl2struct.renderer import TAG_DIALECTS, render_struct
from ddl2struct.sql_parser import parse_statement, read_sql_file


def _setup_logging(log_cfg: dict, verbose: bool):
    level = logging.DEBUG if verbose else getattr(logging, str(log_cfg.get("level", "WARNING")).upper(), logging.WARNING)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_cfg.get("file"):
        handlers.append(logging.FileHandler(log_cfg["file"], encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format=log_cfg.get("format", "%(asctime)s [%(levelname)s] %(message)s"),
        handlers=handlers,
        force=True,
    )


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="ddl2struct",
        usage="%(prog)s [options] <sql file>",
        description="Generate a Go struct with ORM tags from a MySQL CREATE TABLE statement",
    )
    parser.add_argument("sql_files", nargs="*", metavar="<sql file>", help="File holding one CREATE TABLE statement")
    parser.add_argument("--dialect", choices=sorted(TAG_DIALECTS), help="Tag dialect (default from config: gorm)")
    parser.add_argument("--config", help="Optional JSON config overriding the packaged config.json")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging, including the parsed statement")
    return parser


def run(sql_path: str, dialect: str, read_dialect: str = "mysql") -> str:
    """Read, parse, extract and render one SQL file."""
    text = read_sql_file(sql_path)
    stmt = parse_statement(text, dialect=read_dialect)
    table = extract_table(stmt)
    return render_struct(table, dialect)


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if len(args.sql_files) != 1:
        parser.print_usage(sys.stdout)
        return 0

    try:
        cfg = load_config(args.config) if args.config else CFG
    except Ddl2StructError as e:
        print(f"ddl2struct: {e}", file=sys.stderr)
        return 1

    _setup_logging(cfg.get("log", {}), args.verbose)

    dialect = args.dialect or cfg.get("render", {}).get("dialect", "gorm")
    if dialect not in TAG_DIALECTS:
        logging.error("Unknown tag dialect %r in config", dialect)
        return 1

    try:
        output = run(args.sql_files[0], dialect, cfg.get("sql", {}).get("read_dialect", "mysql"))
    except Ddl2StructError as e:
        logging.error("%s: %s", type(e).__name__, e)
        return 1

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
