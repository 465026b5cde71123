"""Connection snippet shown to users after attaching an instance."""

from textwrap import dedent

from falkordb_integration.config.constants import EnvVarConstants
from .env_vars import env_prefix


def generate_client_code(idx: int, graph_name: str = "my_graph") -> str:
  """Python snippet that connects using the variables of slot idx."""
  prefix = env_prefix(idx)
  return dedent(
    f"""\
    import os

    from falkordb import FalkorDB

    db = FalkorDB(
      host=os.environ["{prefix}{EnvVarConstants.HOSTNAME}"],
      port=int(os.environ["{prefix}{EnvVarConstants.PORT}"]),
      username=os.environ["{prefix}{EnvVarConstants.USERNAME}"],
      password=os.environ["{prefix}{EnvVarConstants.PASSWORD}"],
    )

    graph = db.select_graph("{graph_name}")
    graph.query("CREATE (n:Person {{name: 'Bob'}})")
    """
  )
