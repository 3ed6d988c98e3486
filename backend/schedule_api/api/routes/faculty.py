from collections import defaultdict

from fastapi import APIRouter, Depends, Query

from schedule_api.api.deps import get_repository, require_admin, require_reader
from schedule_api.core.config import get_settings
from schedule_api.core.exceptions import ConflictError, ResourceNotFoundError, ValidationError
from schedule_api.core.security import CurrentUser
from schedule_api.db.repositories import FacultyRepository, GroupRepository
from schedule_api.models.activity_log import EntityKind
from schedule_api.models.faculty import Faculty, Group
from schedule_api.schemas.faculty import (
    CourseOut,
    FacultyCreate,
    FacultyListOut,
    FacultyOut,
    FacultyResult,
    FacultyUpdate,
    GroupRefOut,
)
from schedule_api.services.audit import log_activity
from schedule_api.services.groups import invalid_group_names
from schedule_api.services.resolve import resolve_or_create_group

router = APIRouter()

faculties_repository = get_repository(FacultyRepository)
groups_repository = get_repository(GroupRepository)


def faculty_tree(faculty: Faculty) -> FacultyOut:
    by_course: dict[str, list[Group]] = defaultdict(list)
    for group in faculty.groups:
        by_course[group.course].append(group)
    courses = [
        CourseOut(
            name=course,
            groups=[GroupRefOut.model_validate(group) for group in sorted(groups, key=lambda item: item.name)],
        )
        for course, groups in sorted(by_course.items())
    ]
    return FacultyOut(id=faculty.id, name=faculty.name, courses=courses)


def ensure_valid_group_names(names: list[str]) -> None:
    marker = get_settings().group_course_marker
    invalid = invalid_group_names(names, marker)
    if invalid:
        raise ValidationError(
            f'Некорректные названия групп: {", ".join(invalid)}. Название группы должно содержать "{marker}"',
            errors=[{"field": "groups", "message": name} for name in invalid],
        )


@router.post("/add", response_model=FacultyResult)
def create_faculty(
    payload: FacultyCreate,
    current_user: CurrentUser = Depends(require_admin),
    faculties: FacultyRepository = Depends(faculties_repository),
    groups: GroupRepository = Depends(groups_repository),
) -> FacultyResult:
    if faculties.find_by_name(payload.name) is not None:
        raise ConflictError(f"Факультет {payload.name} уже существует", status_code=400)
    ensure_valid_group_names(payload.groups)
    existing_groups = groups.find_by_names(payload.groups)
    if existing_groups:
        names = ", ".join(sorted(group.name for group in existing_groups))
        raise ConflictError(f"Одна или несколько групп уже существуют: {names}", status_code=400)

    faculty = faculties.add(Faculty(name=payload.name))
    for group_name in payload.groups:
        resolve_or_create_group(groups, group_name, faculty_id=faculty.id)
    log_activity(
        faculties.db,
        user=current_user,
        entity=EntityKind.faculty,
        action="created",
        entity_id=faculty.id,
        details={"groups": payload.groups},
    )
    faculties.commit()
    return FacultyResult(result=True, message=f"Факультет {payload.name} был успешно создан")


@router.get("/get", response_model=FacultyListOut)
def list_faculties(
    current_user: CurrentUser = Depends(require_reader),
    faculties: FacultyRepository = Depends(faculties_repository),
) -> FacultyListOut:
    return FacultyListOut(facultets=[faculty_tree(faculty) for faculty in faculties.list_with_groups()])


@router.get("/getOne", response_model=FacultyListOut)
def get_faculty(
    id: str = Query(..., min_length=1, description="Faculty id"),
    current_user: CurrentUser = Depends(require_reader),
    faculties: FacultyRepository = Depends(faculties_repository),
) -> FacultyListOut:
    found = faculties.list_with_groups(faculty_id=id)
    if not found:
        raise ResourceNotFoundError(f"Факультет с id {id} не найден")
    return FacultyListOut(facultets=[faculty_tree(found[0])])


@router.post("/edit", response_model=FacultyResult)
def update_faculty(
    payload: FacultyUpdate,
    current_user: CurrentUser = Depends(require_admin),
    faculties: FacultyRepository = Depends(faculties_repository),
    groups: GroupRepository = Depends(groups_repository),
) -> FacultyResult:
    faculty = faculties.get(payload.id)
    if faculty is None:
        raise ResourceNotFoundError(f"Факультет с id {payload.id} не найден")
    if faculties.find_by_name(payload.name, exclude_id=faculty.id) is not None:
        raise ConflictError(f"Факультет {payload.name} уже существует", status_code=400)

    faculty.name = payload.name
    if payload.groups is not None:
        ensure_valid_group_names(payload.groups)
        foreign = [
            group.name
            for group in groups.find_by_names(payload.groups)
            if group.faculty_id is not None and group.faculty_id != faculty.id
        ]
        if foreign:
            raise ConflictError(
                f"Группы уже относятся к другому факультету: {', '.join(sorted(foreign))}",
                status_code=400,
            )
        kept_ids = {resolve_or_create_group(groups, name, faculty_id=faculty.id) for name in payload.groups}
        for group in groups.find_all(Group.faculty_id == faculty.id):
            if group.id not in kept_ids:
                group.faculty_id = None
        for group_id in kept_ids:
            groups.get(group_id).faculty_id = faculty.id

    log_activity(
        faculties.db,
        user=current_user,
        entity=EntityKind.faculty,
        action="updated",
        entity_id=faculty.id,
        details={"name": payload.name, "groups": payload.groups},
    )
    faculties.commit()
    return FacultyResult(result=True, message=f"Факультет {faculty.name} успешно отредактирован")


@router.delete("/delete", response_model=FacultyResult)
def delete_faculty(
    id: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(require_admin),
    faculties: FacultyRepository = Depends(faculties_repository),
    groups: GroupRepository = Depends(groups_repository),
) -> FacultyResult:
    faculty = faculties.get(id)
    if faculty is None:
        raise ResourceNotFoundError(f"Факультет с id {id} не найден")
    name = faculty.name
    detached = groups.find_all(Group.faculty_id == faculty.id)
    for group in detached:
        group.faculty_id = None
    log_activity(
        faculties.db,
        user=current_user,
        entity=EntityKind.faculty,
        action="deleted",
        entity_id=faculty.id,
        details={"name": name, "detached_groups": len(detached)},
    )
    faculties.delete(faculty)
    faculties.commit()
    return FacultyResult(result=True, message=f"Факультет {name} удален")
