import pytest

from app.core.exceptions import InvalidStateError, ResourceNotFoundError
from app.models.course import Course
from app.models.enrollment import Enrollment
from app.models.learning_preference import LearningPreference
from app.models.study_resource import ResourceType, StudyResource
from app.services.recommendations import RecommendationGenerator


def add_resource(repos, course, resource_type, title):
    return repos.study_resources.add(
        StudyResource(
            course_id=course.id,
            type=resource_type,
            title=title,
            description=f"{title} for {course.code}",
            url=f"https://example.edu/{course.code.lower()}/{title.lower().replace(' ', '-')}",
        )
    )


@pytest.fixture()
def enrolled(repos, student):
    user, headers = student
    course = repos.courses.add(Course(code="CS101", name="Introduction to Computer Science", department="CS"))
    repos.enrollments.add(Enrollment(user_id=user.id, course_id=course.id, semester="Fall 2030"))
    return user, headers, course


def test_generate_prefers_video_by_default(repos, enrolled):
    user, _, course = enrolled
    video = add_resource(repos, course, ResourceType.VIDEO, "Lecture Recording")
    article = add_resource(repos, course, ResourceType.ARTICLE, "Reading List")

    created = RecommendationGenerator(repos).generate(user.id)

    priorities = {item.resource_id: item.priority for item in created}
    assert priorities == {video.id: 10, article.id: 0}
    assert all(item.reason == f"Recommended based on your enrollment in {course.name}" for item in created)
    assert all(item.completed is False for item in created)


def test_generate_uses_stored_preference(repos, enrolled):
    user, _, course = enrolled
    video = add_resource(repos, course, ResourceType.VIDEO, "Lecture Recording")
    article = add_resource(repos, course, ResourceType.ARTICLE, "Reading List")
    repos.preferences.add(LearningPreference(user_id=user.id, preferred_type=ResourceType.ARTICLE, study_duration=45))

    created = RecommendationGenerator(repos).generate(user.id)

    priorities = {item.resource_id: item.priority for item in created}
    assert priorities == {video.id: 0, article.id: 10}


def test_second_run_only_adds_new_resources(repos, enrolled):
    user, _, course = enrolled
    add_resource(repos, course, ResourceType.VIDEO, "Lecture Recording")
    generator = RecommendationGenerator(repos)

    assert len(generator.generate(user.id)) == 1
    assert generator.generate(user.id) == []

    quiz = add_resource(repos, course, ResourceType.PRACTICE_QUIZ, "Practice Quiz")
    third = generator.generate(user.id)
    assert [item.resource_id for item in third] == [quiz.id]
    assert len(repos.recommendations.list_for_user(user.id)) == 2


def test_generate_requires_enrollment(repos, student):
    user, _ = student
    with pytest.raises(InvalidStateError, match="User is not enrolled in any course"):
        RecommendationGenerator(repos).generate(user.id)


def test_generate_requires_resources(repos, enrolled):
    user, _, _ = enrolled
    with pytest.raises(ResourceNotFoundError, match="No study resources found for enrolled courses"):
        RecommendationGenerator(repos).generate(user.id)


def test_generate_unknown_user(repos):
    with pytest.raises(ResourceNotFoundError, match="User not found"):
        RecommendationGenerator(repos).generate("missing")


def test_generate_endpoint(client, repos, enrolled):
    user, headers, course = enrolled
    add_resource(repos, course, ResourceType.VIDEO, "Lecture Recording")
    add_resource(repos, course, ResourceType.NOTES, "Lecture Notes")

    response = client.post(f"/api/recommendations/generate/{user.id}", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "Generated 2 new recommendations"
    assert sorted(item["priority"] for item in body["data"]) == [0, 10]

    again = client.post(f"/api/recommendations/generate/{user.id}", headers=headers)
    assert again.json()["message"] == "Generated 0 new recommendations"
    assert again.json()["data"] == []

    listed = client.get(f"/api/recommendations/user/{user.id}", headers=headers).json()["data"]
    assert [item["priority"] for item in listed] == [10, 0]
    assert listed[0]["resource"]["type"] == "VIDEO"


def test_generate_endpoint_without_enrollment(client, student):
    user, headers = student

    response = client.post(f"/api/recommendations/generate/{user.id}", headers=headers)

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "User is not enrolled in any course"}


def test_mark_completed_defaults_to_true(client, repos, enrolled):
    user, headers, course = enrolled
    add_resource(repos, course, ResourceType.VIDEO, "Lecture Recording")
    created = client.post(f"/api/recommendations/generate/{user.id}", headers=headers).json()["data"]

    response = client.patch(f"/api/recommendations/{created[0]['id']}/complete", headers=headers)

    assert response.status_code == 200
    assert response.json()["data"]["completed"] is True

    reopened = client.patch(
        f"/api/recommendations/{created[0]['id']}/complete", json={"completed": False}, headers=headers
    )
    assert reopened.json()["data"]["completed"] is False


def test_other_students_cannot_generate(client, enrolled, make_user):
    user, _, _ = enrolled
    _, intruder_headers = make_user("intruder")

    response = client.post(f"/api/recommendations/generate/{user.id}", headers=intruder_headers)

    assert response.status_code == 403


def test_generated_recommendations_follow_resource_creation_order(repos, enrolled):
    user, _, course = enrolled
    titles = [f"Resource {index}" for index in range(8)]
    resources = [add_resource(repos, course, ResourceType.ARTICLE, title) for title in titles]

    created = RecommendationGenerator(repos).generate(user.id)

    assert [item.resource_id for item in created] == [resource.id for resource in resources]
    assert [item.title for item in repos.study_resources.list_for_course(course.id)] == titles
