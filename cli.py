"""CLI for phrasemeter: score a passphrase, or check it against the quote corpus."""

import argparse
import json
import logging
import sys

from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import load_config
from .evaluator import score_phrase
from .normalizer import similarity_tokens
from .resources import load_resources
from .similarity import match_quote

def _setup_logging(verbosity: int, diagnostics: bool) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[RichHandler(console=Console(stderr=True), show_path=False)])
    # the per-comparison trace is opt-in even at -vv
    logging.getLogger("phrasemeter.similarity.diagnostics").setLevel(logging.DEBUG if diagnostics else logging.WARNING)

def _settings(args) -> dict:
    cfg = load_config(args.config)
    for key in ("corpus_path", "templates_path", "flair_path"):
        value = getattr(args, key, None)
        if value:
            cfg[key] = value
    return cfg

def cmd_score(args):
    cfg = _settings(args)
    res = load_resources(cfg)
    offline_rate = args.offline_rate if args.offline_rate is not None else float(cfg["offline_rate"])
    online_rate = args.online_rate if args.online_rate is not None else float(cfg["online_rate"])
    try:
        result = score_phrase(
            args.phrase,
            word_pool_size=args.pool_size if args.pool_size is not None else int(cfg["word_pool_size"]),
            penalty=args.penalty,
            offline_rate=offline_rate,
            online_rate=online_rate,
            templates=res.templates,
            index=res.index,
            flair=res.flair,
            quote_threshold=float(cfg["quote_threshold"]),
        )
    except ValueError as e:
        print(f"[red]Cannot score phrase: {escape(str(e))}[/red]")
        return 2

    if args.json:
        sys.stdout.write(json.dumps(result.to_dict(), indent=2) + "\n")
        return 0

    header = f"{result.adjusted_entropy_bits:.1f} bits, {result.word_count} words"
    body = (
        f"Theoretical entropy: {result.entropy_bits:.1f} bits\n"
        f"Penalty: {result.penalty:.1f} bits\n"
        f"Adjusted entropy: {result.adjusted_entropy_bits:.1f} bits\n\n"
        f"[bold]Offline[/bold] ({offline_rate:g} guesses/s): "
        f"{result.offline_crack_time.formatted}\n  [italic]{result.offline_crack_time.flair}[/italic]\n"
        f"[bold]Online[/bold] ({online_rate:g} guesses/s): "
        f"{result.online_crack_time.formatted}\n  [italic]{result.online_crack_time.flair}[/italic]"
    )
    print(Panel(body, title=header))

    fired = {name: value for name, value in result.signals.items() if value}
    if fired:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Signal")
        table.add_column("Bits", justify="right")
        for name, value in fired.items():
            table.add_row(name, f"{value:+d}")
        print(table)
    elif args.penalty is not None and args.penalty >= 0:
        print("[yellow]Penalty supplied explicitly; heuristics skipped.[/yellow]")
    return 0

def cmd_match(args):
    cfg = _settings(args)
    res = load_resources(cfg)
    if res.index is None:
        print("[red]No quote corpus available.[/red]")
        return 1
    tokens = similarity_tokens(args.phrase)
    threshold = args.threshold if args.threshold is not None else float(cfg["quote_threshold"])
    m = match_quote(tokens, res.index, threshold)
    verdict = "[red]quote-like[/red]" if m.matched else "[green]not quote-like[/green]"
    print(f"{verdict} (threshold {threshold}, {m.candidates_scanned} candidate(s) scanned)")
    print(f"Tokens: {', '.join(tokens) or '(none)'}")
    if m.best_quote is not None:
        print(f"Closest quote: \"{escape(m.best_quote.text)}\" by {escape(m.best_quote.author or 'unknown')} "
              f"(similarity {m.best_similarity:.3f})")
    return 0

def main(argv=None):
    parser = argparse.ArgumentParser(prog="phrasemeter")
    parser.add_argument("--config", "-c", type=str, help="Path to a config.json")
    parser.add_argument("--corpus", dest="corpus_path", type=str, help="Quote corpus JSON file")
    parser.add_argument("--templates", dest="templates_path", type=str, help="Phrase template JSON file")
    parser.add_argument("--flair", dest="flair_path", type=str, help="Flair table JSON file")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="-v for info, -vv for debug logging")
    parser.add_argument("--diagnostics", action="store_true", help="Log every quote comparison as JSON")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sc = sub.add_parser("score", help="Estimate entropy and crack time of a passphrase")
    sc.add_argument("phrase", type=str, help="Passphrase to evaluate (wrap in quotes)")
    sc.add_argument("--pool-size", type=int, help="Size of the word list the phrase was drawn from")
    sc.add_argument("--penalty", type=float, help="Use this penalty instead of the heuristics")
    sc.add_argument("--offline-rate", type=float, help="Offline guesses per second")
    sc.add_argument("--online-rate", type=float, help="Online guesses per second")
    sc.add_argument("--json", action="store_true", help="Print the result as JSON")
    sc.set_defaults(func=cmd_score)

    mt = sub.add_parser("match", help="Check a phrase against the quote corpus")
    mt.add_argument("phrase", type=str, help="Phrase to check")
    mt.add_argument("--threshold", type=float, help="Similarity threshold (default from config)")
    mt.set_defaults(func=cmd_match)

    args = parser.parse_args(argv)
    _setup_logging(args.verbose, args.diagnostics)
    return args.func(args)

if __name__ == "__main__":
    sys.exit(main())
