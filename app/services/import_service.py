"""
Guest list import (CSV / Excel) into the guest directory
"""

import argparse
import io
import logging
import os
from typing import Dict, List, Tuple
import pandas as pd

from app.schemas.guest import Guest
from app.services.repositories import GuestRepo, normalize_guest_id

logger = logging.getLogger(__name__)

class ImportService:
    """Service for bulk-loading guests"""

    # normalized header -> Guest field
    COLUMNS = {
        'code': 'id',
        'salutation': 'salutation',
        'full name': 'name',
        'title / position': 'position',
        'organization / company': 'company',
    }
    REQUIRED_COLUMNS = ['code']
    SUPPORTED_EXTENSIONS = ('.csv', '.xlsx', '.xls')

    @staticmethod
    def create_template() -> bytes:
        """Create a CSV template with the expected headers"""
        df = pd.DataFrame([
            ['GUEST001', 'Mr.', 'Sample Guest', 'Director', 'Sample Company'],
        ], columns=['Code', 'Salutation', 'Full Name', 'Title / Position', 'Organization / Company'])
        return df.to_csv(index=False).encode('utf-8')

    @staticmethod
    def read_table(file_content: bytes, filename: str) -> pd.DataFrame:
        """Read an upload as strings so codes like 00012 keep their zeros"""
        if filename.lower().endswith('.csv'):
            return pd.read_csv(io.BytesIO(file_content), dtype=str, keep_default_na=False, encoding='utf-8-sig')
        return pd.read_excel(io.BytesIO(file_content), dtype=str, keep_default_na=False)

    @staticmethod
    def column_mapping(df: pd.DataFrame) -> Dict[str, str]:
        """Map Guest field -> actual column name, matching headers case-insensitively"""
        mapping = {}
        for col in df.columns:
            field = ImportService.COLUMNS.get(str(col).lower().strip())
            if field:
                mapping[field] = col
        return mapping

    @staticmethod
    def validate_structure(df: pd.DataFrame) -> Tuple[bool, List[str]]:
        errors = []
        normalized_columns = [str(col).lower().strip() for col in df.columns]
        missing = [c for c in ImportService.REQUIRED_COLUMNS if c not in normalized_columns]
        if missing:
            errors.append(f"Missing required columns: {', '.join(missing)}")
        if df.empty:
            errors.append("File contains no data rows")
        return len(errors) == 0, errors

    @staticmethod
    def rows_to_guests(df: pd.DataFrame) -> List[Guest]:
        mapping = ImportService.column_mapping(df)
        guests = []
        for _, row in df.iterrows():
            code = normalize_guest_id(row[mapping['id']])
            if not code:
                continue
            values = {
                field: str(row[col]).strip()
                for field, col in mapping.items()
                if field != 'id'
            }
            guests.append(Guest(id=code, **values))
        return guests

    @staticmethod
    def process_upload(
        file_content: bytes,
        filename: str,
        guests: GuestRepo
    ) -> Tuple[bool, List[str], int]:
        """Validate an uploaded guest list and upsert every row into the directory"""
        if not filename.lower().endswith(ImportService.SUPPORTED_EXTENSIONS):
            return False, [f"Unsupported file type. Use one of: {', '.join(ImportService.SUPPORTED_EXTENSIONS)}"], 0

        try:
            df = ImportService.read_table(file_content, filename)
        except Exception as e:
            logger.warning(f"Could not read {filename}: {e!r}")
            return False, [f"Could not read file: {e}"], 0

        valid, errors = ImportService.validate_structure(df)
        if not valid:
            return False, errors, 0

        # repeated codes overwrite each other; count each guest once
        imported = set()
        for guest in ImportService.rows_to_guests(df):
            guests.save(guest)
            imported.add(guest.id)
        processed_count = len(imported)

        logger.info(f"Imported {processed_count} guests from {filename}")
        return True, [], processed_count


def main(argv=None):
    """Seed the guest directory from a file: python -m app.services.import_service guests.csv"""
    from app.services.qr_service import QRService
    from app.services.storage import get_store

    parser = argparse.ArgumentParser(description="Import a guest list into the configured store")
    parser.add_argument("path", help="CSV or Excel guest list")
    parser.add_argument("--qr-dir", help="Also write one check-in QR PNG per guest into this directory")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    with open(args.path, "rb") as f:
        content = f.read()

    guests = GuestRepo(get_store())
    success, errors, count = ImportService.process_upload(content, os.path.basename(args.path), guests)
    if not success:
        for error in errors:
            logger.error(error)
        raise SystemExit(1)

    if args.qr_dir:
        for guest in guests.list_all():
            QRService.save_qr_image(guest.id, args.qr_dir)
        logger.info(f"Wrote QR codes to {args.qr_dir}")

    print(f"Imported {count} guests")


if __name__ == "__main__":
    main()
