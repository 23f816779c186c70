from lqy.cli import app

app(prog_name="lqy")   # `python -m lqy "what is a monad?"`
