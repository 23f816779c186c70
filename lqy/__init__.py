"""lqy
Ask a chat-completion model a question from the shell.

Modules
-------
config : load ~/.lqyconfig.yaml into a validated Config
prompt : merge stdin + argv, append output-format hints, truncate
client : one POST to the chat-completions endpoint, pull out the answer
cli    : typer entry point wiring the above together
errors : exception hierarchy shared by all of the above
"""

__all__ = ["config", "prompt", "client", "cli", "errors"]
__version__ = "0.1.0"
