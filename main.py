import argparse
import logging

from fastapi import FastAPI, Response
from fastapi.responses import HTMLResponse
from collector.main import register
from core.config import settings
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
import uvicorn
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)


def create_app(registry):
    app = FastAPI(title="FastAPI + Prometheus Stat Exporter")

    @app.get("/", response_class=HTMLResponse)
    def index():
        return HTMLResponse(content="""
        <html>
        <head><title>Stat Exporter</title></head>
        <body>
            <h1>Stat Exporter</h1>
            <p>Visit <a href="/metrics">/metrics</a> to see Prometheus metrics</p>
            <p>Metric list: <a href="/metrics_html">/metrics_html</a></p>
        </body>
        </html>
        """)

    @app.get("/metrics")
    def metrics():
        data = generate_latest(registry)
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    @app.get("/metrics_html", response_class=HTMLResponse)
    def metrics_html():
        metrics = {}  # name -> {type, desc}

        for family in registry.collect():
            # counter 在 /metrics 中以 _total 结尾导出
            name = family.name + "_total" if family.type == "counter" else family.name
            metrics[name] = {"type": family.type, "desc": family.documentation}

        html = """
        <html>
        <head>
            <meta charset="utf-8">
            <title>Metrics</title>
            <style>
                body { font-family: Arial, sans-serif; }
                table { border-collapse: collapse; width: 100%; }
                th, td { border: 1px solid #ddd; padding: 8px; }
                th { background-color: #f4f4f4; text-align: left; }
                tr:hover { background-color: #fafafa; }
            </style>
        </head>
        <body>
            <h1>Metrics List</h1>
            <table>
                <tr>
                    <th>Metric Name</th>
                    <th>Type</th>
                    <th>Description</th>
                </tr>
        """

        for name, info in sorted(metrics.items()):
            html += f"""
                <tr>
                    <td>{name}</td>
                    <td>{info.get("type", "-")}</td>
                    <td>{info.get("desc", "-")}</td>
                </tr>
            """

        html += """
            </table>
        </body>
        </html>
        """

        return HTMLResponse(content=html)

    if settings.DEV:
        app.add_middleware(CORSMiddleware, allow_origins=["*"])

    return app


app = create_app(register)


def main():
    parser = argparse.ArgumentParser(description="Prometheus exporter for /proc/stat")
    parser.add_argument("--host", default=settings.HOST,
                        help="Address to listen on for HTTP requests")
    parser.add_argument("--port", type=int, default=settings.PORT,
                        help="Port to listen on for HTTP requests")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        help="Logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())
    logger.info("Reading %s/stat", settings.PROC_PATH)
    logger.info("Metrics available at http://%s:%d/metrics", args.host, args.port)

    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
