"""HTTP client for the task REST API."""

import httpx

from ..errors import TaskTrackerError
from ..logging_config import get_logger
from ..models import TaskResponse, TaskStatus

logger = get_logger(__name__)

TASKS_PATH = "/api/tasks"


class TaskApiError(TaskTrackerError):
    """Raised for any failed API call, whatever the cause."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TaskApiClient:
    """Thin wrapper over the five task endpoints.

    Pass ``http_client`` to reuse an existing ``httpx.Client`` (for example
    a FastAPI ``TestClient``); otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "TaskApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("task api unreachable", method=method, path=path, error=str(e))
            raise TaskApiError(f"Cannot reach task service: {e}") from e

        if response.is_success:
            return response

        try:
            detail = response.json().get("detail")
        except (ValueError, AttributeError):
            detail = None
        message = detail if isinstance(detail, str) and detail else (
            f"Request failed with status code {response.status_code}"
        )
        logger.debug(
            "task api error", method=method, path=path, status_code=response.status_code
        )
        raise TaskApiError(message, status_code=response.status_code)

    def list_tasks(self, status: TaskStatus | None = None) -> list[TaskResponse]:
        params = {"status": status.value} if status else None
        response = self._request("GET", TASKS_PATH, params=params)
        return [TaskResponse.model_validate(item) for item in response.json()]

    def get_task(self, task_id: str) -> TaskResponse:
        response = self._request("GET", f"{TASKS_PATH}/{task_id}")
        return TaskResponse.model_validate(response.json())

    def create_task(self, fields: dict) -> TaskResponse:
        response = self._request("POST", TASKS_PATH, json=fields)
        return TaskResponse.model_validate(response.json())

    def update_task(self, task_id: str, fields: dict) -> TaskResponse:
        response = self._request("PATCH", f"{TASKS_PATH}/{task_id}", json=fields)
        return TaskResponse.model_validate(response.json())

    def delete_task(self, task_id: str) -> TaskResponse:
        response = self._request("DELETE", f"{TASKS_PATH}/{task_id}")
        return TaskResponse.model_validate(response.json())
