#!/usr/bin/env python3
"""
Send prompt: pregunta un destí, el classifica i mostra on aniria el flux d'enviament.

Ús:
    python src/send_cli.py                      # mode interactiu
    python src/send_cli.py <destí> [--json]     # una sola decisió
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

# Carregar variables d'entorn des del fitxer .env
from dotenv import load_dotenv

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from destination import parse_destination
from networks import Network
from send_intent import DEFAULT_NEXT_STAGE, Proceed, SendIntent, decide

logger = logging.getLogger(__name__)

EXIT_WORDS = ("sortir", "exit", "quit", "adéu", "adeu")


# ============== CONFIGURACIÓ ==============

@dataclass
class SendConfig:
    network: Optional[Network] = None
    log_level: str = "INFO"
    next_stage: str = DEFAULT_NEXT_STAGE


def load_config() -> SendConfig:
    """Read BITCOIN_NETWORK, LOG_LEVEL and SEND_NEXT_STAGE from the environment (.env included)."""
    load_dotenv()
    return SendConfig(
        network=Network.parse(os.getenv("BITCOIN_NETWORK", "any")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        next_stage=os.getenv("SEND_NEXT_STAGE", DEFAULT_NEXT_STAGE),
    )


def configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ============== INTERFÍCIE ==============

class SendAssistant:
    """Pantalla d'enviament en mode terminal"""

    def __init__(self, config: SendConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()

    def show(self, text: str, intent: SendIntent) -> None:
        if isinstance(intent, Proceed):
            parsed = parse_destination(text, self.config.network)
            details = [f"Tipus: {intent.kind.value}"]
            if parsed.network is not None:
                details.append(f"Xarxa: {parsed.network.value}")
            if parsed.address_type:
                details.append(f"Script: {parsed.address_type}")
            if parsed.uri is not None and parsed.uri.amount is not None:
                details.append(f"Import: {parsed.uri.amount} BTC")
            details.append(f"Següent pas: {intent.next_stage_path(self.config.next_stage)}")
            self.console.print(Panel("\n".join(details), title="✅ Continuar", border_style="green"))
        else:
            self.console.print(f"[yellow]⚠️  {intent.message}[/yellow]")

    def check(self, text: str, as_json: bool = False) -> int:
        intent = decide(text, self.config.network)
        if as_json:
            self.console.print_json(json.dumps(intent.to_dict()))
        else:
            self.show(text, intent)
        return 0 if isinstance(intent, Proceed) else 1

    def run(self) -> int:
        net = self.config.network.value if self.config.network else "totes"
        self.console.print(Panel(
            "[bold green]Enviar[/bold green]\n"
            "Enganxa una clau pública de node o una adreça.\n"
            f"Xarxa acceptada: {net}\n"
            "(escriu 'sortir' per acabar)",
            border_style="green",
        ))
        while True:
            text = Prompt.ask("[bold cyan]Destí[/bold cyan]", default="", show_default=False)
            if text.lower() in EXIT_WORDS:
                self.console.print("[yellow]👋 Adéu![/yellow]")
                return 0
            self.show(text, decide(text, self.config.network))


# ============== MAIN ==============

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify a send destination and show the resulting decision",
    )
    parser.add_argument("destination", nargs="?", help="Destination text; omit for interactive mode")
    parser.add_argument("--network", type=str, help="mainnet, testnet, signet, regtest or any (overrides BITCOIN_NETWORK)")
    parser.add_argument("--json", action="store_true", help="Print the decision as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    try:
        config = load_config()
        if args.network is not None:
            config.network = Network.parse(args.network)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 2

    configure_logging("DEBUG" if args.verbose else config.log_level)
    logger.debug("network=%s next_stage=%s", config.network, config.next_stage)

    assistant = SendAssistant(config, console)
    if args.destination is not None:
        return assistant.check(args.destination, as_json=args.json)
    return assistant.run()


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Interromput per l'usuari")
        sys.exit(130)
