from app.models.learning_preference import LearningPreference
from app.models.study_resource import ResourceType
from app.services.recommendations import resolve_preferred_type


def test_upsert_creates_with_default_duration(client, student):
    user, headers = student

    response = client.post(
        f"/api/learning-preferences/user/{user.id}", json={"preferredType": "ARTICLE"}, headers=headers
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["preferredType"] == "ARTICLE"
    assert data["studyDuration"] == 30


def test_upsert_updates_existing_preference(client, student):
    user, headers = student
    created = client.post(
        f"/api/learning-preferences/user/{user.id}",
        json={"preferredType": "VIDEO", "studyDuration": 45},
        headers=headers,
    ).json()["data"]

    updated = client.post(
        f"/api/learning-preferences/user/{user.id}", json={"preferredType": "FLASHCARDS"}, headers=headers
    ).json()["data"]

    assert updated["id"] == created["id"]
    assert updated["preferredType"] == "FLASHCARDS"
    assert updated["studyDuration"] == 45

    listed = client.get(f"/api/learning-preferences/user/{user.id}", headers=headers).json()["data"]
    assert len(listed) == 1


def test_upsert_rejects_unknown_type(client, student):
    user, headers = student

    response = client.post(
        f"/api/learning-preferences/user/{user.id}", json={"preferredType": "PODCAST"}, headers=headers
    )

    assert response.status_code == 400


def test_delete_preference(client, repos, student):
    user, headers = student
    preference = repos.preferences.add(
        LearningPreference(user_id=user.id, preferred_type=ResourceType.NOTES, study_duration=20)
    )

    response = client.delete(f"/api/learning-preferences/{preference.id}", headers=headers)

    assert response.status_code == 200
    assert client.get(f"/api/learning-preferences/user/{user.id}", headers=headers).json()["data"] == []
    assert client.delete(f"/api/learning-preferences/{preference.id}", headers=headers).status_code == 404


def test_earliest_preference_wins_when_created_together(repos, make_user):
    for index in range(20):
        user, _ = make_user(f"learner{index}")
        repos.preferences.add(LearningPreference(user_id=user.id, preferred_type=ResourceType.ARTICLE, study_duration=30))
        repos.preferences.add(
            LearningPreference(user_id=user.id, preferred_type=ResourceType.FLASHCARDS, study_duration=30)
        )

        preferences = repos.preferences.list_for_user(user.id)

        assert [item.preferred_type for item in preferences] == [ResourceType.ARTICLE, ResourceType.FLASHCARDS]
        assert resolve_preferred_type(preferences) == ResourceType.ARTICLE


def test_upsert_updates_the_earliest_of_several_preferences(client, repos, student):
    user, headers = student
    first = repos.preferences.add(
        LearningPreference(user_id=user.id, preferred_type=ResourceType.VIDEO, study_duration=30)
    )
    repos.preferences.add(LearningPreference(user_id=user.id, preferred_type=ResourceType.NOTES, study_duration=15))

    response = client.post(
        f"/api/learning-preferences/user/{user.id}", json={"preferredType": "TEXTBOOK"}, headers=headers
    )

    assert response.json()["data"]["id"] == first.id
    listed = client.get(f"/api/learning-preferences/user/{user.id}", headers=headers).json()["data"]
    assert [item["preferredType"] for item in listed] == ["TEXTBOOK", "NOTES"]
