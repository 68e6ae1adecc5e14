"""
UnitGraph API Routes
====================

HTTP endpoints over one shared, read-only UnitGraph.

Usage:
    python -m unitgraph.run --config config.yaml --serve
"""

from fastapi import FastAPI, HTTPException, Query as QueryParam

import unitgraph
from unitgraph.convert import UnitConverter
from unitgraph.errors import InvalidQuantity, MalformedQuery, NoConversionPath, UnresolvedUnit


def create_app(converter: UnitConverter) -> FastAPI:
    """Build the API around an already constructed converter."""
    app = FastAPI(
        title="UnitGraph",
        description="Unit conversion over a graph of table equivalences",
        version=unitgraph.__version__,
    )

    @app.get("/health")
    async def health():
        """Health check."""
        return {
            "status": "ok",
            "version": unitgraph.__version__,
            "units": len(converter.graph),
            "edges": converter.graph.edge_count,
        }

    @app.get("/units")
    async def units():
        """Every known unit as full_name(abbreviation)."""
        return {"units": converter.list_units()}

    @app.get("/convert")
    async def convert(q: str = QueryParam(..., description="e.g. '24 in to ft'")):
        """
        Convert a free-text query.

        Errors:
            400: unparsable query or quantity
            404: unknown unit
            422: units not convertible
        """
        try:
            result = converter.convert_text(q)
        except (InvalidQuantity, MalformedQuery) as e:
            raise HTTPException(status_code=400, detail=str(e))
        except UnresolvedUnit as e:
            raise HTTPException(status_code=404, detail=str(e))
        except NoConversionPath as e:
            raise HTTPException(status_code=422, detail=str(e))

        return result.to_dict()

    return app
