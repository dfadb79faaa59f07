import sys
import os
import traceback

# Run from the project root: python tests/verify_schemas.py
sys.path.append(os.getcwd())

print("Checking request/response schemas...")

try:
    from pydantic import ValidationError

    from boxoffice import schemas
    print("Schemas package imported.")

    booking = schemas.BookingCreate(seance_id=1, selected_seats="3")
    print(f"BookingCreate (single seat): {booking}")

    report = schemas.ReportRequest.model_validate(
        {"reportType": "financial_chart", "dateFrom": "2024-01-01", "minAmount": 20}
    )
    print(f"ReportRequest: {report}")

    try:
        schemas.ReportRequest.model_validate({"reportType": "payroll"})
        print("FAILURE: unknown report type accepted.")
        sys.exit(1)
    except ValidationError:
        print("Unknown report type rejected.")

    seance = schemas.SeanceCreate(spectacle_id=1, hall_id=1, start_time="", price="40")
    print(f"SeanceCreate without start time: {seance}")

    print("SUCCESS: schemas verified.")

except Exception:
    print("FAILURE: schema verification failed.")
    traceback.print_exc()
    sys.exit(1)
