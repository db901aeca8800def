import logging
import os
from datetime import datetime


def setup_logging(level=logging.INFO, log_dir: str = "logs"):
    """Setup basic logging configuration"""
    os.makedirs(log_dir, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[
            logging.FileHandler(
                os.path.join(
                    log_dir, f"pipeline_{datetime.now().strftime('%Y-%m-%d')}.log"
                )
            ),
            logging.StreamHandler(),
        ],
        force=True,
    )
    return logging.getLogger(__name__)


def log_stage(stage: str, records: int):
    """Log a pipeline stage together with the number of records it produced"""
    logger = logging.getLogger(__name__)
    logger.info(f"Stage {stage} produced {records} records")
