import logging
import os
import time
from flask import current_app
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)


class RecordStorage:
    """Medical record files on local disk under a single upload directory."""

    def __init__(self, upload_dir):
        self.upload_dir = os.path.abspath(upload_dir)

    def ensure_dir(self):
        os.makedirs(self.upload_dir, exist_ok=True)

    def build_filename(self, pet_id, original_name, timestamp=None):
        if timestamp is None:
            timestamp = time.time()
        safe_name = secure_filename(original_name or '') or 'upload'
        return f"{pet_id}_{int(timestamp)}_{safe_name}"

    def save(self, file_storage, pet_id):
        path = os.path.join(self.upload_dir, self.build_filename(pet_id, file_storage.filename))
        try:
            file_storage.save(path)
        except OSError:
            # Drop whatever part of the file made it to disk
            self.discard(path)
            raise
        return path

    def discard(self, path):
        """Best-effort removal; failures are logged, never raised."""
        try:
            os.remove(path)
        except OSError as e:
            logger.warning(f"Failed to delete file from disk: {path}: {e}")
            return False
        return True

    def sweep_orphans(self, referenced_paths, dry_run=False):
        """Delete files in the upload directory that no record references."""
        if not os.path.isdir(self.upload_dir):
            return []
        referenced = {os.path.abspath(p) for p in referenced_paths}
        orphans = []
        for entry in sorted(os.listdir(self.upload_dir)):
            path = os.path.join(self.upload_dir, entry)
            if not os.path.isfile(path) or path in referenced:
                continue
            if dry_run or self.discard(path):
                orphans.append(path)
        return orphans


def get_storage():
    return current_app.extensions['record_storage']
