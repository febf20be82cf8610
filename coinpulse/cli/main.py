"""
CoinPulse CLI v0.1

Command-line interface for collecting a multi-exchange market snapshot and
printing it as a plain-text table.

Commands:
- snapshot: 抓取 Binance / Coinbase / OKX 數據並輸出表格
- symbols:  列出幣種及各交易所交易對格式
"""

import logging
import sys
from typing import List, Tuple

import click

from coinpulse import __version__
from coinpulse.data.aggregation import MultiExchangeAggregator
from coinpulse.data.config import ConfigError, load_config
from coinpulse.data.symbol_mapper import SymbolMapper
from coinpulse.reports.text_reporter import render_snapshot

logger = logging.getLogger(__name__)


def _setup_logging(verbose: int) -> None:
    """設定日誌等級（輸出到 stderr，避免干擾表格）

    預設 WARNING；-v 為 INFO，-vv 為 DEBUG。
    """
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)


def _split_symbols(values: Tuple[str, ...]) -> List[str]:
    """拆解 -s BTC,ETH -s SOL 形式的輸入"""
    symbols: List[str] = []
    for value in values:
        symbols.extend(segment.strip() for segment in value.split(",") if segment.strip())
    return symbols


@click.group()
@click.version_option(version=__version__, prog_name="CoinPulse")
def cli():
    """
    CoinPulse CLI v0.1

    多交易所加密貨幣市場快照工具
    """
    pass


@cli.command(name="snapshot")
@click.option("-s", "--symbols", "symbols", multiple=True, help="幣種 (例如: BTC,ETH)，可重複")
@click.option("-c", "--config", "config_file", help="YAML 配置檔案路徑")
@click.option("-o", "--output", help="輸出報表到檔案")
@click.option("--no-summary", is_flag=True, help="不顯示摘要區塊")
@click.option("-v", "--verbose", count=True, help="顯示詳細日誌 (-vv 為 DEBUG)")
def snapshot_cmd(symbols, config_file, output, no_summary, verbose):
    """
    抓取多交易所市場快照並輸出表格

    Example:
        coinpulse snapshot -s BTC,ETH,SOL
        coinpulse snapshot -c configs/snapshot.yml -o snapshot.txt
    """
    _setup_logging(verbose)

    try:
        config = load_config(config_file)
        if symbols:
            config = config.with_symbols(_split_symbols(symbols))
        aggregator = MultiExchangeAggregator(config)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    logger.info(f"Collecting snapshot for: {', '.join(config.symbols)}")
    try:
        snapshot = aggregator.collect()
    finally:
        aggregator.close()

    report = render_snapshot(snapshot, show_summary=not no_summary)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(report)
        except OSError as e:
            click.echo(f"Error: {e}", err=True)
            raise click.Abort()
        click.echo(f"Report saved to {output}")
    else:
        click.echo(report)


@cli.command(name="symbols")
@click.option("-c", "--config", "config_file", help="YAML 配置檔案路徑")
def symbols_cmd(config_file):
    """
    列出配置中的幣種及各交易所交易對

    Example:
        coinpulse symbols
    """
    try:
        config = load_config(config_file)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise click.Abort()

    mapper = SymbolMapper()

    click.echo("Configured Symbols:")
    click.echo("=" * 48)
    click.echo(f"{'Coin':<8} {'Binance':<14} {'Coinbase':<12} {'OKX':<12}")
    for symbol in config.symbols:
        click.echo(
            f"{symbol:<8} {mapper.to_binance(symbol):<14} "
            f"{mapper.to_coinbase(symbol):<12} {mapper.to_okx(symbol):<12}"
        )
    click.echo("=" * 48)
    click.echo(f"Total: {len(config.symbols)} symbols")


if __name__ == "__main__":
    cli()
