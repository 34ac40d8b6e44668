"""
Driver, truck, facility and log API tests.
"""

import pytest

DRIVER_PAYLOAD = {
    "first_name": "Marcus",
    "last_name": "Bell",
    "license_number": "MB-2231",
    "license_state": "OH",
    "address": {"city": "Columbus", "state": "OH"},
}

TRUCK_PAYLOAD = {
    "truck_number": "T-12",
    "vin": "3AKJHHDR5JSJM1234",
    "make": "Freightliner",
    "model": "Cascadia",
    "year": 2019,
    "mileage": 120000,
    "trailer_type": "REEFER",
    "fuel_type": "DIESEL",
}


async def post(client, path, payload, headers):
    response = await client.post(path, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_driver_employment_lifecycle(client, owner_headers):
    driver = await post(client, "/v1/drivers", {**DRIVER_PAYLOAD, "assigned_truck_id": "truck-9"}, owner_headers)
    assert driver["employment_status"] == "ACTIVE"

    response = await client.post(f"/v1/drivers/{driver['id']}/reinstate", headers=owner_headers)
    assert response.status_code == 409

    response = await client.post(f"/v1/drivers/{driver['id']}/suspend", headers=owner_headers)
    assert response.json()["employment_status"] == "SUSPENDED"

    response = await client.post(f"/v1/drivers/{driver['id']}/terminate", headers=owner_headers)
    assert response.json()["employment_status"] == "TERMINATED"
    assert response.json()["assigned_truck_id"] is None

    response = await client.post(f"/v1/drivers/{driver['id']}/reinstate", headers=owner_headers)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_driver_update_and_list(client, owner_headers):
    driver = await post(client, "/v1/drivers", DRIVER_PAYLOAD, owner_headers)
    await post(client, "/v1/drivers", {**DRIVER_PAYLOAD, "license_state": "PA"}, owner_headers)

    response = await client.patch(
        f"/v1/drivers/{driver['id']}", json={"phone": "555-0100"}, headers=owner_headers
    )
    assert response.status_code == 200
    assert response.json()["phone"] == "555-0100"

    response = await client.patch(
        f"/v1/drivers/{driver['id']}", json={"employment_status": "TERMINATED"}, headers=owner_headers
    )
    assert response.status_code == 422

    page = (await client.get("/v1/drivers?license_state=OH", headers=owner_headers)).json()
    assert page["total"] == 1
    assert page["items"][0]["id"] == driver["id"]


@pytest.mark.asyncio
async def test_truck_lifecycle_and_mileage(client, owner_headers):
    truck = await post(client, "/v1/trucks", {**TRUCK_PAYLOAD, "assigned_driver_id": "driver-3"}, owner_headers)
    assert truck["status"] == "AVAILABLE"

    response = await client.post(f"/v1/trucks/{truck['id']}/maintenance", headers=owner_headers)
    assert response.status_code == 409

    response = await client.post(f"/v1/trucks/{truck['id']}/dispatch", headers=owner_headers)
    assert response.json()["status"] == "IN_TRANSIT"

    response = await client.post(f"/v1/trucks/{truck['id']}/maintenance", headers=owner_headers)
    assert response.json()["status"] == "MAINTENANCE"

    response = await client.patch(
        f"/v1/trucks/{truck['id']}/mileage", json={"mileage": 119000}, headers=owner_headers
    )
    assert response.status_code == 422

    response = await client.patch(
        f"/v1/trucks/{truck['id']}/mileage", json={"mileage": 121500}, headers=owner_headers
    )
    assert response.json()["mileage"] == 121500

    response = await client.patch(
        f"/v1/trucks/{truck['id']}/last-maintenance", json={"last_maintenance": "2024-06-01"}, headers=owner_headers
    )
    assert response.json()["last_maintenance"] == "2024-06-01"

    response = await client.post(f"/v1/trucks/{truck['id']}/retire", headers=owner_headers)
    assert response.json()["status"] == "RETIRED"
    assert response.json()["assigned_driver_id"] is None

    response = await client.post(f"/v1/trucks/{truck['id']}/dispatch", headers=owner_headers)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_truck_filters(client, owner_headers, other_owner_headers):
    reefer = await post(client, "/v1/trucks", TRUCK_PAYLOAD, owner_headers)
    await post(client, "/v1/trucks", {**TRUCK_PAYLOAD, "vin": "OTHERVIN", "trailer_type": "FLATBED"}, owner_headers)
    await post(client, "/v1/trucks", TRUCK_PAYLOAD, other_owner_headers)

    page = (await client.get("/v1/trucks?trailer_type=REEFER", headers=owner_headers)).json()
    assert [t["id"] for t in page["items"]] == [reefer["id"]]

    page = (await client.get(f"/v1/trucks?vin={TRUCK_PAYLOAD['vin']}", headers=owner_headers)).json()
    assert page["total"] == 1

    response = await client.patch(f"/v1/trucks/{reefer['id']}", json={"mileage": 1}, headers=owner_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_facility_filters_and_services(client, owner_headers):
    depot = await post(client, "/v1/facilities", {
        "facility_number": "F-1",
        "name": "Central Depot",
        "type": "Terminal",
        "address": {"city": "Reno", "state": "NV"},
        "parking_capacity": 60,
        "services_available": ["FUEL"],
    }, owner_headers)
    await post(client, "/v1/facilities", {
        "facility_number": "F-2",
        "name": "Yard",
        "address": {"state": "NV"},
        "parking_capacity": 5,
        "services_available": ["FUEL", "REPAIRS"],
    }, owner_headers)

    response = await client.put(
        f"/v1/facilities/{depot['id']}/services",
        json={"services": ["REPAIRS", "FUEL", "REPAIRS"]},
        headers=owner_headers,
    )
    assert response.status_code == 200
    assert response.json()["services_available"] == ["REPAIRS", "FUEL"]

    page = (await client.get(
        "/v1/facilities?stateCode=NV&services=fuel,repairs,teleport&minCapacity=10",
        headers=owner_headers,
    )).json()
    assert page["total"] == 1
    assert page["items"][0]["id"] == depot["id"]

    page = (await client.get("/v1/facilities?maxCapacity=10", headers=owner_headers)).json()
    assert [f["facility_number"] for f in page["items"]] == ["F-2"]


@pytest.mark.asyncio
async def test_fuel_log_prices_itself(client, owner_headers):
    log = await post(client, "/v1/fuel-logs", {
        "truck_id": "truck-1",
        "date": "2024-05-03",
        "gallons_purchased": 100,
        "price_per_gallon": 3.999,
    }, owner_headers)
    assert log["total_cost"] == 399.9

    response = await client.patch(
        f"/v1/fuel-logs/{log['id']}", json={"gallons_purchased": 50}, headers=owner_headers
    )
    assert response.json()["total_cost"] == 199.95

    page = (await client.get("/v1/fuel-logs?truck_id=truck-1", headers=owner_headers)).json()
    assert page["total"] == 1


@pytest.mark.asyncio
async def test_maintenance_and_incident_logs(client, owner_headers, other_owner_headers):
    maintenance = await post(client, "/v1/maintenance-logs", {
        "truck_id": "truck-1", "date": "2024-04-20", "service_type": "Oil change", "cost": 180,
    }, owner_headers)
    await post(client, "/v1/maintenance-logs", {
        "truck_id": "truck-2", "date": "2024-04-21", "service_type": "Tires",
    }, owner_headers)

    page = (await client.get("/v1/maintenance-logs?service_type=Oil change", headers=owner_headers)).json()
    assert [m["id"] for m in page["items"]] == [maintenance["id"]]

    incident = await post(client, "/v1/incident-reports", {
        "trip_id": "trip-1", "truck_id": "truck-1", "type": "BREAKDOWN", "date": "2024-04-22",
    }, owner_headers)

    page = (await client.get("/v1/incident-reports?tripID=trip-1&truckID=truck-1", headers=owner_headers)).json()
    assert page["total"] == 1

    response = await client.get(f"/v1/incident-reports/{incident['id']}", headers=other_owner_headers)
    assert response.status_code == 404

    response = await client.delete(f"/v1/maintenance-logs/{maintenance['id']}", headers=owner_headers)
    assert response.status_code == 204


@pytest.mark.asyncio
async def test_driver_patch_null_for_required_field_is_rejected(client, owner_headers):
    driver = await post(client, "/v1/drivers", DRIVER_PAYLOAD, owner_headers)

    response = await client.patch(f"/v1/drivers/{driver['id']}", json={"first_name": None}, headers=owner_headers)
    assert response.status_code == 422
    assert response.json()["error_code"] == "ERR_VALIDATION_001"
    assert response.json()["details"]["field"] == "first_name"

    response = await client.patch(
        f"/v1/drivers/{driver['id']}", json={"assigned_truck_id": None}, headers=owner_headers
    )
    assert response.status_code == 200
    assert response.json()["assigned_truck_id"] is None


@pytest.mark.asyncio
async def test_embedded_values_longer_than_their_columns_are_rejected(client, owner_headers):
    response = await client.post(
        "/v1/trucks",
        json={**TRUCK_PAYLOAD, "license_plate": {"number": "P" * 21, "state": "OH"}},
        headers=owner_headers,
    )
    assert response.status_code == 422

    response = await client.post(
        "/v1/drivers",
        json={**DRIVER_PAYLOAD, "address": {"zip": "4" * 21}},
        headers=owner_headers,
    )
    assert response.status_code == 422

    response = await client.post(
        "/v1/facilities",
        json={"facility_number": "F-1", "name": "North Yard", "contact_info": {"phone": "5" * 51}},
        headers=owner_headers,
    )
    assert response.status_code == 422

    response = await client.post(
        "/v1/fuel-logs",
        json={"truck_id": "t" * 33, "date": "2024-05-01", "gallons_purchased": 10, "price_per_gallon": 4},
        headers=owner_headers,
    )
    assert response.status_code == 422
