"""Console log retrieval tool. Reads the artifact store; needs no browser."""

from ...responses import create_success_response
from ...types import ToolResponse
from ..args import ConsoleLogsArgs
from ..base import ToolContext, ToolHandler


def filter_console_logs(logs: list[str], args: ConsoleLogsArgs) -> list[str]:
    """Apply the type, search and limit filters; limit keeps the newest entries"""
    selected = logs
    if args.type != "all":
        prefix = f"[{args.type}]"
        selected = [entry for entry in selected if entry.startswith(prefix)]
    if args.search:
        selected = [entry for entry in selected if args.search in entry]
    if args.limit is not None:
        selected = selected[-args.limit :]
    return selected


class ConsoleLogsTool(ToolHandler):
    name = "playwright_console_logs"
    description = "Retrieve console messages captured from the browser"
    args_type = ConsoleLogsArgs

    async def execute(self, args: ConsoleLogsArgs, context: ToolContext) -> ToolResponse:
        selected = filter_console_logs(context.artifacts.console_logs(), args)
        if args.clear:
            context.artifacts.clear_console_logs()

        if not selected:
            return create_success_response("No console logs matching the criteria")
        return create_success_response(
            [f"Retrieved {len(selected)} console log(s):", *selected]
        )
