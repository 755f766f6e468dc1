#!/usr/bin/env python3

# Purpose: Remove log files and audit records older than LOG_RETENTION_DAYS.

import os
import sys

os.environ['LC_ALL'] = 'C'

rootdir = os.path.abspath(os.path.dirname(__file__)) + '/../'
sys.path.insert(0, rootdir)

import settings
from libs import utils
from tools import logger

if not os.path.isdir(settings.LOG_DIR):
    logger.info("* Log directory {} does not exist, nothing to clean up.".format(settings.LOG_DIR))
    sys.exit()

removed = utils.cleanup_old_files(settings.LOG_DIR, settings.LOG_RETENTION_DAYS)

for path in removed:
    logger.debug("* Removed: {}".format(path))

logger.info("* {:20}: {} files removed (older than {} days).".format(
    settings.LOG_DIR, len(removed), settings.LOG_RETENTION_DAYS))
