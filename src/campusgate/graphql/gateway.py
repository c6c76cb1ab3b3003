"""
GraphQL Gateway for the Campus services.

Mounts the composed schema on FastAPI, formats errors uniformly and serves the
GraphiQL explorer.
"""

from typing import Any, Dict

from fastapi import Request
from fastapi.responses import HTMLResponse
from strawberry.fastapi import GraphQLRouter
from strawberry.http import GraphQLHTTPResponse
from strawberry.types import ExecutionResult

from campusgate.core.logging import get_logger
from .composer import ComposedSchema
from .context import get_context
from .errors import normalize_error

logger = get_logger(__name__)


class GatewayRouter(GraphQLRouter):
    """GraphQL router whose responses carry normalized errors."""

    async def process_result(self, request: Request, result: ExecutionResult) -> GraphQLHTTPResponse:
        data: GraphQLHTTPResponse = {"data": result.data}
        if result.errors:
            data["errors"] = [normalize_error(error) for error in result.errors]
        if result.extensions:
            data["extensions"] = result.extensions
        return data


class GraphQLGateway:
    """
    Front door for the composed schema.

    ``get_router`` returns a FastAPI router with ``GET``/``POST`` on the GraphQL
    path and the GraphiQL page on ``/graphiql``.
    """

    def __init__(self, composed: ComposedSchema, path: str = "/graphql"):
        self.composed = composed
        self.path = path
        self._router = None

    @property
    def schema(self):
        return self.composed.schema

    def get_router(self) -> GraphQLRouter:
        """Get FastAPI GraphQL router."""
        if self._router is None:
            router = GatewayRouter(
                self.schema,
                path=self.path,
                graphql_ide="graphiql",
                context_getter=get_context,
            )
            router.add_api_route(
                "/graphiql",
                self._graphiql,
                methods=["GET"],
                response_class=HTMLResponse,
                include_in_schema=False,
            )
            self._router = router
            logger.info("GraphQL router ready", path=self.path)
        return self._router

    async def _graphiql(self) -> HTMLResponse:
        return HTMLResponse(self.get_graphiql_html(self.path))

    def get_graphiql_html(self, endpoint: str = "/graphql") -> str:
        """Generate the GraphiQL explorer page pointed at ``endpoint``."""
        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8" />
            <title>Campus Gateway GraphiQL</title>
            <style>
                body {{ height: 100%; margin: 0; width: 100%; overflow: hidden; }}
                #graphiql {{ height: 100vh; }}
            </style>
            <link rel="stylesheet" href="https://unpkg.com/graphiql/graphiql.min.css" />
            <script crossorigin src="https://unpkg.com/react@18/umd/react.production.min.js"></script>
            <script crossorigin src="https://unpkg.com/react-dom@18/umd/react-dom.production.min.js"></script>
            <script crossorigin src="https://unpkg.com/graphiql/graphiql.min.js"></script>
        </head>
        <body>
            <div id="graphiql">Loading...</div>
            <script>
                const fetcher = GraphiQL.createFetcher({{ url: '{endpoint}' }});
                const root = ReactDOM.createRoot(document.getElementById('graphiql'));
                root.render(React.createElement(GraphiQL, {{
                    fetcher: fetcher,
                    defaultQuery: `# Campus Gateway
#
# Example queries:

query Courses {{
  allCourses {{
    code
    name
    credits
    professor
  }}
}}

query Students {{
  allStudents {{
    code
    username
  }}
}}`
                }}));
            </script>
        </body>
        </html>
        """

    def get_health_info(self) -> Dict[str, Any]:
        """Get GraphQL gateway health information."""
        fields = self.composed.fields_by_resource()
        return {
            "status": "healthy",
            "endpoints": {
                "graphql": self.path,
                "graphiql": "/graphiql",
            },
            "resources": [
                {
                    "name": descriptor.name,
                    "base_url": descriptor.config.base_url,
                    "queries": fields[descriptor.name]["query"],
                    "mutations": fields[descriptor.name]["mutation"],
                }
                for descriptor in self.composed.descriptors
            ],
        }
