def test_course_codes_are_unique_and_uppercased(client, admin):
    _, headers = admin

    created = client.post(
        "/api/courses", json={"code": " cs101 ", "name": "Introduction to Computer Science", "department": "CS"},
        headers=headers,
    )
    assert created.status_code == 201
    assert created.json()["data"]["code"] == "CS101"

    duplicate = client.post(
        "/api/courses", json={"code": "CS101", "name": "Another", "department": "CS"}, headers=headers
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["message"] == "Course code already exists"

    assert [item["code"] for item in client.get("/api/courses").json()["data"]] == ["CS101"]


def test_room_building_and_number_are_unique(client, admin):
    _, headers = admin
    body = {"building": "Science Building", "number": "101", "capacity": 120}

    first = client.post("/api/rooms", json=body, headers=headers)
    second = client.post("/api/rooms", json=body, headers=headers)

    assert first.status_code == 201
    assert second.status_code == 409

    other = client.post("/api/rooms", json={**body, "number": "102"}, headers=headers).json()["data"]
    clash = client.put(f"/api/rooms/{other['id']}", json={"number": "101"}, headers=headers)
    assert clash.status_code == 409

    resized = client.put(f"/api/rooms/{other['id']}", json={"capacity": 60}, headers=headers)
    assert resized.json()["data"]["capacity"] == 60


def test_study_resources_belong_to_existing_courses(client, admin):
    _, headers = admin
    course = client.post(
        "/api/courses", json={"code": "ENG105", "name": "Academic Writing", "department": "English"}, headers=headers
    ).json()["data"]
    body = {
        "title": "Essay Structure Guide",
        "description": "How to build an argument",
        "url": "https://example.edu/eng105/essay-structure",
        "type": "ARTICLE",
        "courseId": course["id"],
    }

    created = client.post("/api/study-resources", json=body, headers=headers)
    assert created.status_code == 201
    resource = created.json()["data"]

    listed = client.get(f"/api/study-resources/course/{course['id']}").json()["data"]
    assert [item["id"] for item in listed] == [resource["id"]]

    missing_course = client.post("/api/study-resources", json={**body, "courseId": "missing"}, headers=headers)
    assert missing_course.status_code == 404

    updated = client.put(f"/api/study-resources/{resource['id']}", json={"type": "NOTES"}, headers=headers)
    assert updated.json()["data"]["type"] == "NOTES"

    assert client.delete(f"/api/study-resources/{resource['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/study-resources/{resource['id']}").status_code == 404
