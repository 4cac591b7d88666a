"""Client-side state as immutable snapshots and pure reducers.

Remote calls go through ``TaskboardStore``, which dispatches a pending action,
performs the call, then dispatches fulfilled or rejected. Reducers never do
I/O and always return a new state object.
"""
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import httpx

from ..services.projection import STATUS_ALL, SORT_CREATED_AT, project_tasks
from .api import ApiError, TaskboardClient

LOGIN = "auth/loginUser"
REGISTER = "auth/registerUser"
VALIDATE_TOKEN = "auth/validateToken"
LOGOUT = "auth/logout"
AUTH_CLEAR_ERROR = "auth/clearError"
AUTH_CLEAR_MESSAGE = "auth/clearMessage"

FETCH_TASKS = "tasks/fetchTasks"
CREATE_TASK = "tasks/createTask"
UPDATE_TASK = "tasks/updateTask"
DELETE_TASK = "tasks/deleteTask"
FETCH_STATS = "tasks/fetchStats"
SET_FILTER_STATUS = "tasks/setFilterStatus"
SET_SORT_BY = "tasks/setSortBy"
SET_SEARCH_TERM = "tasks/setSearchTerm"
SELECT_TASK = "tasks/selectTask"
CLEAR_TASKS = "tasks/clearTasks"
TASKS_CLEAR_ERROR = "tasks/clearError"
TASKS_CLEAR_MESSAGE = "tasks/clearMessage"


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


def pending(name: str) -> Action:
    return Action(f"{name}/pending")


def fulfilled(name: str, payload: Any = None) -> Action:
    return Action(f"{name}/fulfilled", payload)


def rejected(name: str, error: Optional[str]) -> Action:
    return Action(f"{name}/rejected", error)


@dataclass(frozen=True)
class AuthState:
    token: Optional[str] = None
    email: Optional[str] = None
    is_authenticated: bool = False
    loading: bool = False
    error: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class TasksState:
    tasks: Tuple[Mapping[str, Any], ...] = ()
    stats: Optional[Mapping[str, int]] = None
    loading: bool = False
    error: Optional[str] = None
    message: Optional[str] = None
    selected_task: Optional[Mapping[str, Any]] = None
    filter_status: str = STATUS_ALL
    sort_by: str = SORT_CREATED_AT
    search_term: str = ""


Reducer = Callable[[Any, Any], Any]


def _signed_in(message: str) -> Reducer:
    def handle(state: AuthState, payload) -> AuthState:
        return replace(
            state,
            loading=False,
            is_authenticated=True,
            token=payload["token"],
            email=payload["email"],
            message=message,
        )
    return handle


def _sign_in_failed(state: AuthState, error) -> AuthState:
    return replace(state, loading=False, is_authenticated=False, error=error)


def _loading(state, _payload=None):
    return replace(state, loading=True, error=None)


def _failed(state, error):
    return replace(state, loading=False, error=error)


AUTH_HANDLERS: Dict[str, Reducer] = {
    f"{LOGIN}/pending": _loading,
    f"{LOGIN}/fulfilled": _signed_in("Login successful!"),
    f"{LOGIN}/rejected": _sign_in_failed,
    f"{REGISTER}/pending": _loading,
    f"{REGISTER}/fulfilled": _signed_in("Registration successful!"),
    f"{REGISTER}/rejected": _sign_in_failed,
    f"{VALIDATE_TOKEN}/pending": lambda s, _: replace(s, loading=True),
    f"{VALIDATE_TOKEN}/fulfilled": lambda s, p: replace(
        s, loading=False, is_authenticated=True, token=p["token"]
    ),
    f"{VALIDATE_TOKEN}/rejected": lambda s, _: replace(
        s, loading=False, is_authenticated=False, token=None
    ),
    LOGOUT: lambda s, _: AuthState(),
    AUTH_CLEAR_ERROR: lambda s, _: replace(s, error=None),
    AUTH_CLEAR_MESSAGE: lambda s, _: replace(s, message=None),
}


def _task_created(state: TasksState, task) -> TasksState:
    return replace(
        state,
        loading=False,
        tasks=(task,) + state.tasks,
        message="Task created successfully!",
    )


def _task_updated(state: TasksState, task) -> TasksState:
    tasks = tuple(task if t.get("id") == task.get("id") else t for t in state.tasks)
    return replace(state, loading=False, tasks=tasks, message="Task updated successfully!")


def _task_deleted(state: TasksState, task_id) -> TasksState:
    tasks = tuple(t for t in state.tasks if t.get("id") != task_id)
    return replace(state, loading=False, tasks=tasks, message="Task deleted successfully!")


TASKS_HANDLERS: Dict[str, Reducer] = {
    f"{FETCH_TASKS}/pending": _loading,
    f"{FETCH_TASKS}/fulfilled": lambda s, p: replace(s, loading=False, tasks=tuple(p or ())),
    f"{FETCH_TASKS}/rejected": _failed,
    f"{CREATE_TASK}/pending": _loading,
    f"{CREATE_TASK}/fulfilled": _task_created,
    f"{CREATE_TASK}/rejected": _failed,
    f"{UPDATE_TASK}/pending": _loading,
    f"{UPDATE_TASK}/fulfilled": _task_updated,
    f"{UPDATE_TASK}/rejected": _failed,
    f"{DELETE_TASK}/pending": _loading,
    f"{DELETE_TASK}/fulfilled": _task_deleted,
    f"{DELETE_TASK}/rejected": _failed,
    # Stats are secondary: no loading flag and no error surfaced
    f"{FETCH_STATS}/fulfilled": lambda s, p: replace(s, stats=p),
    SET_FILTER_STATUS: lambda s, p: replace(s, filter_status=p),
    SET_SORT_BY: lambda s, p: replace(s, sort_by=p),
    SET_SEARCH_TERM: lambda s, p: replace(s, search_term=p),
    SELECT_TASK: lambda s, p: replace(s, selected_task=p),
    CLEAR_TASKS: lambda s, _: replace(s, tasks=(), stats=None, error=None, message=None),
    TASKS_CLEAR_ERROR: lambda s, _: replace(s, error=None),
    TASKS_CLEAR_MESSAGE: lambda s, _: replace(s, message=None),
}


def auth_reducer(state: AuthState, action: Action) -> AuthState:
    handler = AUTH_HANDLERS.get(action.type)
    return handler(state, action.payload) if handler else state


def tasks_reducer(state: TasksState, action: Action) -> TasksState:
    handler = TASKS_HANDLERS.get(action.type)
    return handler(state, action.payload) if handler else state


def select_visible_tasks(state: TasksState):
    """The filtered, searched and sorted task list for display."""
    return project_tasks(
        state.tasks,
        status_filter=state.filter_status,
        search_term=state.search_term,
        sort_by=state.sort_by,
    )


class TaskboardStore:
    """Holds the current auth and task state and runs remote calls against it."""

    def __init__(self, client: TaskboardClient):
        self.client = client
        self.auth = AuthState(token=client.token)
        self.tasks = TasksState()

    def dispatch(self, action: Action):
        self.auth = auth_reducer(self.auth, action)
        self.tasks = tasks_reducer(self.tasks, action)

    def _run(self, name: str, call: Callable[[], Any]) -> Any:
        self.dispatch(pending(name))
        try:
            result = call()
        except ApiError as e:
            self.dispatch(rejected(name, e.message))
            return None
        except httpx.HTTPError as e:
            # Network failures never reach the API, so there is no error body
            self.dispatch(rejected(name, str(e)))
            return None
        self.dispatch(fulfilled(name, result))
        return result

    @property
    def visible_tasks(self):
        return select_visible_tasks(self.tasks)

    # Auth

    def login(self, email: str, password: str):
        return self._run(LOGIN, lambda: {"token": self.client.login(email, password), "email": email})

    def register(self, email: str, password: str):
        return self._run(
            REGISTER, lambda: {"token": self.client.register(email, password), "email": email}
        )

    def validate_token(self):
        """Probe a protected endpoint to check that the held token still works."""
        if not self.client.token:
            self.dispatch(rejected(VALIDATE_TOKEN, "No token found"))
            return None

        result = {"token": self.client.token}
        self.dispatch(pending(VALIDATE_TOKEN))
        try:
            self.client.list_tasks()
        except (ApiError, httpx.HTTPError):
            self.client.logout()
            self.dispatch(rejected(VALIDATE_TOKEN, "Token validation failed"))
            return None
        self.dispatch(fulfilled(VALIDATE_TOKEN, result))
        return result

    def logout(self):
        self.client.logout()
        self.dispatch(Action(LOGOUT))
        self.dispatch(Action(CLEAR_TASKS))

    # Tasks

    def fetch_tasks(self):
        return self._run(FETCH_TASKS, self.client.list_tasks)

    def create_task(self, fields: Dict[str, Any]):
        return self._run(CREATE_TASK, lambda: self.client.create_task(fields))

    def update_task(self, task_id: str, updates: Dict[str, Any]):
        return self._run(UPDATE_TASK, lambda: self.client.update_task(task_id, updates))

    def delete_task(self, task_id: str):
        def call():
            self.client.delete_task(task_id)
            return task_id
        return self._run(DELETE_TASK, call)

    def fetch_stats(self):
        return self._run(FETCH_STATS, self.client.get_stats)

    def set_filter_status(self, status: str):
        self.dispatch(Action(SET_FILTER_STATUS, status))

    def set_sort_by(self, sort_by: str):
        self.dispatch(Action(SET_SORT_BY, sort_by))

    def set_search_term(self, term: str):
        self.dispatch(Action(SET_SEARCH_TERM, term))
