from schedule_api.models.activity_log import ActivityLog  # noqa: F401
from schedule_api.models.audithoria import Audithoria  # noqa: F401
from schedule_api.models.discipline import Discipline, discipline_groups, discipline_teachers  # noqa: F401
from schedule_api.models.faculty import Faculty, Group  # noqa: F401
from schedule_api.models.lesson_type import LessonType  # noqa: F401
from schedule_api.models.schedule import ScheduleEntry, ScheduleItem  # noqa: F401
from schedule_api.models.teacher import Teacher, TeacherBurden  # noqa: F401
from schedule_api.models.user import Role, User, UserRole  # noqa: F401
