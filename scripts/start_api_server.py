#!/usr/bin/env python3
"""
Start the Interview Timeline HTTP tool server.
"""

import uvicorn

from interview_timeline.utils.config import load_config


def main():
    cfg = load_config("default")
    uvicorn.run(
        "interview_timeline.api.server:app",
        host=cfg.server.host,
        port=cfg.server.port,
        reload=False,
        log_level=cfg.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
