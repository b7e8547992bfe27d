import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction
from openpyxl import load_workbook

from catalog.models import Service, ServiceCategory

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["category", "service_id", "name", "description", "fee"]
LIST_COLUMNS = ["requirements", "documents_required"]
DECIMAL_COLUMNS = ["fee", "government_fee", "service_fee"]
TEXT_COLUMNS = ["detailed_description", "processing_time"]


class WorkbookError(Exception):
    """The uploaded workbook cannot be read or lacks required columns."""


# --------------------------
# Excel import
# --------------------------
def _to_decimal(value):
    if value in (None, ""):
        return Decimal("0")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"'{value}' is not a number")
    if amount < 0:
        raise ValueError(f"'{value}' must not be negative")
    return amount


def _to_list(value):
    if value in (None, ""):
        return []
    return [part.strip() for part in str(value).split(";") if part.strip()]


def _to_bool(value):
    if value in (None, ""):
        return True
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "y", "active")


def load_services_workbook(file):
    """
    Read services from the active sheet of an ``.xlsx`` upload.

    The first row is the header. Required columns: category, service_id,
    name, description, fee. Optional: detailed_description,
    government_fee, service_fee, processing_time, is_active and the
    ``;``-separated lists requirements / documents_required.

    Returns ``(rows, errors)``; rows with errors are skipped.
    """
    try:
        wb = load_workbook(file, read_only=True, data_only=True)
        ws = wb.active
    except Exception as e:
        raise WorkbookError(f"Failed to read Excel file: {e}") from e

    rows_iter = ws.iter_rows(values_only=True)
    header_row = next(rows_iter, None) or ()
    header = [str(value).strip() if value else "" for value in header_row]

    missing = [col for col in REQUIRED_COLUMNS if col not in header]
    if missing:
        raise WorkbookError(f"Missing required columns: {', '.join(missing)}")

    col_map = {col: header.index(col) for col in header if col}
    categories = set(ServiceCategory.values)

    rows = []
    errors = []
    seen = set()

    for idx, values in enumerate(rows_iter, start=2):
        def get(col):
            pos = col_map.get(col)
            if pos is None or pos >= len(values):
                return None
            return values[pos]

        if not any(v not in (None, "") for v in values):
            continue

        category = str(get("category") or "").strip()
        if category not in categories:
            errors.append(f"Row {idx}: Unknown category '{category}'")
            continue

        code = str(get("service_id") or "").strip().upper()
        if not code.isalpha() or len(code) > 2:
            errors.append(f"Row {idx}: Invalid service_id '{code}'")
            continue

        if (category, code) in seen:
            errors.append(f"Row {idx}: Duplicate service {category}/{code}")
            continue

        name = str(get("name") or "").strip()
        description = str(get("description") or "").strip()
        if not name or not description:
            errors.append(f"Row {idx}: Missing name or description")
            continue

        row = {
            "category": category,
            "service_id": code,
            "name": name,
            "description": description,
            "is_active": _to_bool(get("is_active")),
        }
        try:
            for col in DECIMAL_COLUMNS:
                row[col] = _to_decimal(get(col))
        except ValueError as e:
            errors.append(f"Row {idx}: {e}")
            continue

        for col in TEXT_COLUMNS:
            value = get(col)
            if value not in (None, ""):
                row[col] = str(value).strip()
        for col in LIST_COLUMNS:
            row[col] = _to_list(get(col))

        seen.add((category, code))
        rows.append(row)

    return rows, errors


# --------------------------
# Catalog reset
# --------------------------
def _field_defaults():
    return {
        "detailed_description": "",
        "government_fee": Decimal("0"),
        "service_fee": Decimal("0"),
        "processing_time": "7-10 working days",
        "requirements": [],
        "documents_required": [],
        "steps": [],
        "faqs": [],
        "is_active": True,
    }


@transaction.atomic
def reset_catalog(rows):
    """
    Make the catalog match ``rows``.

    Services missing from ``rows`` are deleted, or deactivated when
    bookings still reference them. Existing ``(category, service_id)``
    pairs are updated in place so booking references stay valid.
    """
    keys = {(row["category"], row["service_id"].upper()) for row in rows}
    in_use = set(
        Service.objects.filter(bookings__isnull=False).values_list("pk", flat=True).distinct()
    )

    deleted = deactivated = 0
    for service in Service.objects.select_for_update():
        if (service.category, service.service_id) in keys:
            continue
        if service.pk in in_use:
            if service.is_active:
                service.is_active = False
                service.save(update_fields=["is_active", "updated_at"])
                deactivated += 1
        else:
            service.delete()
            deleted += 1

    created = updated = 0
    for row in rows:
        data = {**_field_defaults(), **row}
        category = data.pop("category")
        code = data.pop("service_id").upper()
        _, was_created = Service.objects.update_or_create(
            category=category, service_id=code, defaults=data
        )
        if was_created:
            created += 1
        else:
            updated += 1

    logger.info(
        "Catalog reset: %s created, %s updated, %s deactivated, %s deleted",
        created, updated, deactivated, deleted,
    )
    return {
        "count": len(rows),
        "created": created,
        "updated": updated,
        "deactivated": deactivated,
        "deleted": deleted,
    }
