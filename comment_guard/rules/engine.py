"""
Rule engine for dispatching comment tokens to rules.

This module provides the RuleEngine class that keeps the dispatch table
built from each rule's registered token categories, hands every comment
token to the rules that asked for it, and aggregates the diagnostics.

Files can be scanned concurrently using ThreadPoolExecutor; rules are
stateless, so one rule instance is shared by all worker threads.
"""

import logging
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..cli.errors import SourceReadError
from ..tokens import is_supported, python_comment_tokens, read_comment_tokens
from .base import BaseRule, CommentToken, Diagnostic, Severity, TokenCategory
from .commenting import FindKeywordRule
from .config import RuleConfig, RuleEngineConfig

if TYPE_CHECKING:
    from ..reporters import DiagnosticSink

logger = logging.getLogger(__name__)

# Rules registered by load_builtin_rules(), keyed by rule id, in dispatch order.
BUILTIN_RULES: dict[str, type[BaseRule]] = {FindKeywordRule.RULE_ID: FindKeywordRule}


@dataclass
class ScanError:
    """Error that occurred while scanning a file."""

    file_path: str
    error_message: str
    exception_type: str | None = None
    rule_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_path": self.file_path,
            "error_message": self.error_message,
            "exception_type": self.exception_type,
            "rule_id": self.rule_id,
        }


@dataclass
class FileScanResult:
    """Result of scanning a single file."""

    file_path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    errors: list[ScanError] = field(default_factory=list)
    tokens_scanned: int = 0
    skipped: bool = False
    execution_time_ms: float = 0.0

    @property
    def success(self) -> bool:
        """Check if the file was scanned without errors."""
        return not self.errors


@dataclass
class RuleEngineResult:
    """Aggregated result of a scan over one or more files."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    errors: list[ScanError] = field(default_factory=list)
    execution_time_ms: float = 0.0
    files_scanned: int = 0
    files_skipped: int = 0
    tokens_scanned: int = 0

    def should_block(self, severity_threshold: Severity = Severity.HIGH) -> bool:
        """Check if any diagnostics should block the operation.

        Args:
            severity_threshold: Minimum severity to block

        Returns:
            True if any diagnostic meets or exceeds the threshold
        """
        return any(d.severity >= severity_threshold for d in self.diagnostics)

    @property
    def diagnostic_count(self) -> int:
        """Get the number of diagnostics."""
        return len(self.diagnostics)

    def get_diagnostics_by_rule(self, rule_id: str) -> list[Diagnostic]:
        """Get diagnostics filtered by rule ID.

        Args:
            rule_id: Rule identifier to filter by

        Returns:
            List of diagnostics from the specified rule
        """
        return [d for d in self.diagnostics if d.rule_id == rule_id]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "errors": [e.to_dict() for e in self.errors],
            "execution_time_ms": self.execution_time_ms,
            "files_scanned": self.files_scanned,
            "files_skipped": self.files_skipped,
            "tokens_scanned": self.tokens_scanned,
            "summary": {
                "total_diagnostics": self.diagnostic_count,
                "total_errors": len(self.errors),
            },
        }


class RuleEngine:
    """Engine that dispatches comment tokens to registered rules.

    Each rule declares the token categories it wants through
    ``registered_tokens``; the engine reads that declaration once at
    registration and routes tokens by category afterwards.

    Example usage:
        engine = RuleEngine()
        engine.load_builtin_rules()

        result = engine.check_files([Path("my_file.py")])
        for diagnostic in result.diagnostics:
            print(diagnostic.position, diagnostic.text)
    """

    def __init__(self, config: RuleEngineConfig | None = None):
        """Initialize the rule engine.

        Args:
            config: Optional pre-built configuration
        """
        self.config = config or RuleEngineConfig()

        self._rules: dict[str, BaseRule] = {}
        self._rules_by_token: dict[TokenCategory, list[BaseRule]] = {}

    def load_builtin_rules(self) -> int:
        """Instantiate and register the built-in rules.

        Returns:
            Number of rules loaded

        Raises:
            ConfigurationError: If a rule rejects its configuration.
        """
        loaded = 0
        for rule_id, rule_class in BUILTIN_RULES.items():
            if not self.config.is_rule_enabled(rule_id):
                logger.debug(f"Rule {rule_id} is disabled in config, skipping")
                continue
            rule = rule_class(config=self.config.get_rule_config(rule_id))
            if self.register(rule):
                loaded += 1

        logger.info(f"Loaded {loaded} rules")
        return loaded

    def register(self, rule: BaseRule) -> bool:
        """Register a rule with the engine.

        Args:
            rule: Rule instance to register

        Returns:
            True if the rule was registered, False if disabled in config
        """
        rule_id = rule.rule_id

        if not self.config.is_rule_enabled(rule_id):
            logger.debug(f"Rule {rule_id} is disabled in config, skipping")
            return False

        if rule_id in self._rules:
            self.unregister(rule_id)

        self._rules[rule_id] = rule

        for category in rule.registered_tokens:
            self._rules_by_token.setdefault(category, []).append(rule)

        logger.debug(f"Registered rule: {rule_id}")
        return True

    def unregister(self, rule_id: str) -> bool:
        """Unregister a rule from the engine.

        Args:
            rule_id: Rule identifier to unregister

        Returns:
            True if rule was found and removed, False otherwise
        """
        rule = self._rules.pop(rule_id, None)
        if rule is None:
            return False

        for category in rule.registered_tokens:
            if category in self._rules_by_token:
                self._rules_by_token[category] = [
                    r for r in self._rules_by_token[category] if r.rule_id != rule_id
                ]

        return True

    def get_rule(self, rule_id: str) -> BaseRule | None:
        """Get a rule by its ID."""
        return self._rules.get(rule_id)

    def get_rules_for(self, category: TokenCategory) -> list[BaseRule]:
        """Get the rules registered for a token category."""
        return self._rules_by_token.get(category, []).copy()

    def get_all_rules(self) -> list[BaseRule]:
        """Get all registered rules."""
        return list(self._rules.values())

    def process_token(self, token: CommentToken) -> list[Diagnostic]:
        """Hand one token to every rule registered for its category.

        Args:
            token: Comment token to inspect

        Returns:
            Diagnostics produced for the token, at most one per rule
        """
        diagnostics = []
        for rule in self._rules_by_token.get(token.category, []):
            diagnostic = rule.process(token)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics

    def process_tokens(
        self,
        tokens: Iterable[CommentToken],
        sink: "DiagnosticSink | None" = None,
    ) -> list[Diagnostic]:
        """Dispatch a token stream and forward diagnostics to a sink.

        Args:
            tokens: Comment tokens in file order
            sink: Optional sink receiving each diagnostic as it is found

        Returns:
            All diagnostics in token order
        """
        diagnostics: list[Diagnostic] = []
        for token in tokens:
            for diagnostic in self.process_token(token):
                diagnostics.append(diagnostic)
                if sink is not None:
                    sink.add(diagnostic)
        return diagnostics

    def check_source(self, source: str, file_path: str = "<string>") -> FileScanResult:
        """Scan Python source text.

        Args:
            source: Python source
            file_path: Path recorded in diagnostic positions

        Returns:
            FileScanResult for the source

        Raises:
            SourceReadError: If the source cannot be tokenized and
                continue_on_error is disabled.
        """
        start_time = time.time()
        try:
            tokens = list(python_comment_tokens(source, file_path))
        except SourceReadError as e:
            return self._failed_scan(file_path, e, start_time)
        return self._scan_tokens(file_path, tokens, start_time)

    def check_file(self, file_path: Path) -> FileScanResult:
        """Scan a single file.

        Unsupported file types are skipped with a warning.

        Args:
            file_path: Path to the file

        Returns:
            FileScanResult for the file

        Raises:
            SourceReadError: If the file cannot be read or tokenized and
                continue_on_error is disabled.
        """
        start_time = time.time()

        if not is_supported(file_path):
            logger.warning(f"Skipping {file_path}: unsupported file type")
            return FileScanResult(file_path=str(file_path), skipped=True)

        try:
            tokens = read_comment_tokens(file_path)
        except SourceReadError as e:
            return self._failed_scan(str(file_path), e, start_time)
        return self._scan_tokens(str(file_path), tokens, start_time)

    def check_files(
        self,
        file_paths: list[Path],
        sink: "DiagnosticSink | None" = None,
        parallel: bool | None = None,
    ) -> RuleEngineResult:
        """Scan several files and aggregate the results.

        Results are forwarded to the sink in the order of file_paths,
        whether or not the files were scanned in parallel.

        Args:
            file_paths: Files to scan
            sink: Optional sink receiving every diagnostic
            parallel: Override parallel execution (None = use config)

        Returns:
            RuleEngineResult with diagnostics, errors and counters
        """
        start_time = time.time()

        use_parallel = (
            parallel if parallel is not None else self.config.performance.parallel_execution
        )

        if use_parallel and len(file_paths) > 1:
            max_workers = min(
                self.config.performance.max_parallel_workers, len(file_paths)
            )
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                file_results = list(executor.map(self.check_file, file_paths))
        else:
            file_results = [self.check_file(path) for path in file_paths]

        result = RuleEngineResult()
        for file_result in file_results:
            if file_result.skipped:
                result.files_skipped += 1
                continue

            result.files_scanned += 1
            result.tokens_scanned += file_result.tokens_scanned
            result.errors.extend(file_result.errors)
            result.diagnostics.extend(file_result.diagnostics)
            if sink is not None:
                for diagnostic in file_result.diagnostics:
                    sink.add(diagnostic)

        result.execution_time_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Scanned {result.files_scanned} files, "
            f"{result.diagnostic_count} diagnostics, {len(result.errors)} errors"
        )
        return result

    def _scan_tokens(
        self, file_path: str, tokens: list[CommentToken], start_time: float
    ) -> FileScanResult:
        """Dispatch tokens for one file, recording failing rules as errors."""
        result = FileScanResult(file_path=file_path, tokens_scanned=len(tokens))

        for token in tokens:
            for rule in self._rules_by_token.get(token.category, []):
                try:
                    diagnostic = rule.process(token)
                except Exception as e:
                    logger.warning(f"Rule {rule.rule_id} failed on {file_path}: {e}")
                    result.errors.append(
                        ScanError(
                            file_path=file_path,
                            error_message=str(e),
                            exception_type=type(e).__name__,
                            rule_id=rule.rule_id,
                        )
                    )
                    continue
                if diagnostic is not None:
                    result.diagnostics.append(diagnostic)

        result.execution_time_ms = (time.time() - start_time) * 1000
        return result

    def _failed_scan(
        self, file_path: str, error: SourceReadError, start_time: float
    ) -> FileScanResult:
        if not self.config.continue_on_error:
            raise error

        logger.warning(error.message)
        return FileScanResult(
            file_path=file_path,
            errors=[
                ScanError(
                    file_path=file_path,
                    error_message=error.message,
                    exception_type=type(error).__name__,
                )
            ],
            execution_time_ms=(time.time() - start_time) * 1000,
        )


def create_rule_engine(
    config: RuleEngineConfig | None = None,
    keywords: list[str] | None = None,
    auto_load: bool = True,
) -> RuleEngine:
    """Factory function to create and configure a rule engine.

    Args:
        config: Optional pre-built configuration
        keywords: Optional keyword list for the keyword rule, overriding
            any configured one; the passed config is left unchanged
        auto_load: Whether to load the built-in rules

    Returns:
        Configured RuleEngine instance

    Raises:
        ConfigurationError: If a built-in rule rejects its configuration.
    """
    config = config or RuleEngineConfig()

    if keywords is not None:
        config = replace(config, rules=dict(config.rules))
        rule_config = config.get_rule_config(FindKeywordRule.RULE_ID)
        config.rules[FindKeywordRule.RULE_ID] = RuleConfig(
            enabled=rule_config.enabled,
            severity_override=rule_config.severity_override,
            parameters={**rule_config.parameters, "keywords": list(keywords)},
        )

    engine = RuleEngine(config=config)

    if auto_load:
        engine.load_builtin_rules()

    return engine
