from __future__ import annotations

"""
Text Agent Service.

Delegates document rewrites to an external text agent. One invocation is
made per file; the prompt names the file, the house style guide and the
task (voice review or line-length repair).
"""

import logging
from typing import Callable, List, Optional, Sequence

from standards.domain.config import StandardsConfig
from standards.domain.lint_models import LineViolation
from standards.infra.process import CommandResult, CommandRunner, run_checked

logger = logging.getLogger(__name__)

VOICE_PROMPT = """\
Review the file at {path} according to the writing style and tone requirements in {style_guide}.

Specifically check for:
1. Active voice (avoid passive constructions)
2. No pronouns - reference people by their role (e.g., "executor", "stockholder", "secretary")
3. Clear, precise legal language
4. Proper term definitions before use
5. Logical structure with appropriate headings

If you find any issues, edit the file to fix them. Focus on voice and tone improvements only - \
do not change the legal substance or meaning of the content.

Ensure all edits keep every line at {max} characters or less."""

FIX_PROMPT = """\
Edit the file at {path} so that every line is {max} characters or less, following the \
formatting rules in {style_guide}.

Lines currently over the limit:
{violations}

Break long lines at natural boundaries (spaces, punctuation), keep Markdown structure intact, \
prefer reference-style links for long URLs and do not change the meaning of the content."""


class AgentRunner:
    """
    Invokes the configured text agent with a rendered prompt.

    Args:
        config: Resolved configuration (agent command, style guide, limit).
        runner: Process runner used to launch the agent.
        echo: Optional sink for the agent's captured output.
    """

    def __init__(
            self,
            config: StandardsConfig,
            runner: CommandRunner,
            echo: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.config = config
        self.runner = runner
        self.echo = echo

    def voice_prompt(self, path: str) -> str:
        return VOICE_PROMPT.format(
            path=path,
            style_guide=self.config.style_guide_path,
            max=self.config.max_line_length,
        )

    def fix_prompt(self, path: str, violations: Sequence[LineViolation]) -> str:
        lines = "\n".join(
            f"- Line {v.line_number}: {v.length} characters" for v in violations
        )
        return FIX_PROMPT.format(
            path=path,
            style_guide=self.config.style_guide_path,
            max=self.config.max_line_length,
            violations=lines or "- (none reported)",
        )

    def review_voice(self, path: str) -> CommandResult:
        """
        Ask the agent to revise the voice and tone of one document.

        Raises:
            ExternalToolError: If the agent exits non-zero.
        """
        logger.info(f"Voice review: {path}")
        return self._invoke(self.voice_prompt(path), f"Voice check failed for {path}")

    def fix_line_length(self, path: str, violations: Sequence[LineViolation]) -> CommandResult:
        """
        Ask the agent to rewrap the offending lines of one document.

        Raises:
            ExternalToolError: If the agent exits non-zero.
        """
        logger.info(f"Line-length fix: {path} ({len(violations)} violation(s))")
        return self._invoke(self.fix_prompt(path, violations), f"Fix failed for {path}")

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _invoke(self, prompt: str, description: str) -> CommandResult:
        args: List[str] = [*self.config.agent_command, prompt]
        result = run_checked(self.runner, args, description=description)
        if self.echo and result.output.strip():
            self.echo(result.output.rstrip())
        return result
