"""
provisioner
-----------

토폴로지 빌더가 의존하는 프로비저닝 엔진 인터페이스.

빌더는 리소스를 직접 만들지 않고, 이 인터페이스를 통해
"컴포넌트 등록 → 리소스 선언 → 출력 참조 → export" 만 요청한다.
실제 엔진(Pulumi)은 pulumi_engine.PulumiProvisioner 가 담당하고,
RecordingProvisioner 는 원격 호출 없이 선언 내용만 기록한다. (plan / 테스트용)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import ProvisioningError


class Provisioner(ABC):
    """Abstract base class for provisioning engines."""

    @abstractmethod
    def component(self, type_token: str, name: str, opts: Any = None) -> Any:
        """
        자식 리소스들의 parent 가 될 컴포넌트를 등록하고 핸들을 리턴한다.
        """

    @abstractmethod
    def declare(
        self,
        kind: str,
        name: str,
        args: Mapping[str, Any],
        *,
        parent: Any,
    ) -> Any:
        """
        리소스 하나를 선언한다.

        Args:
            kind: "storage.Bucket" 처럼 `<모듈>.<리소스>` 형태의 리소스 종류.
            name: 논리 이름. 한 토폴로지 안에서 유일해야 한다.
            args: 리소스 인자. 앞서 선언한 리소스의 출력 참조를 포함할 수 있다.
            parent: component() 가 리턴한 핸들.

        Raises:
            ProvisioningError: 선언에 실패한 경우.
        """

    @abstractmethod
    def output(self, resource: Any, field_name: str) -> Any:
        """선언된 리소스의 출력 필드 참조를 리턴한다."""

    @abstractmethod
    def archive(self, path: str) -> Any:
        """디렉토리를 압축한 아카이브 자산을 리턴한다."""

    @abstractmethod
    def export(self, name: str, value: Any) -> None:
        """스택 출력값을 export 한다."""

    @abstractmethod
    def finish(self, component: Any, outputs: Mapping[str, Any]) -> None:
        """컴포넌트 등록을 마무리하고 출력값을 기록한다."""


# -----------------------------
# Recording (in-process) engine
# -----------------------------


@dataclass(frozen=True)
class OutputRef:
    resource: str
    field: str

    def __str__(self) -> str:
        return f"${{{self.resource}.{self.field}}}"


@dataclass(frozen=True)
class Archive:
    path: str


@dataclass
class Component:
    type_token: str
    name: str
    outputs: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Declaration:
    kind: str
    name: str
    args: Mapping[str, Any]
    parent: str
    depends_on: Tuple[str, ...] = ()


def _collect_refs(value: Any, found: List[str]) -> None:
    if isinstance(value, OutputRef):
        if value.resource not in found:
            found.append(value.resource)
    elif isinstance(value, Mapping):
        for v in value.values():
            _collect_refs(v, found)
    elif isinstance(value, (list, tuple)):
        for v in value:
            _collect_refs(v, found)


class RecordingProvisioner(Provisioner):
    """
    선언을 순서대로 기록만 하는 엔진.

    출력 필드는 OutputRef 로 돌려주므로, 어떤 선언이 어떤 선언의 출력을
    소비하는지(depends_on)를 그대로 확인할 수 있다.
    """

    def __init__(self) -> None:
        self.components: List[Component] = []
        self.declarations: List[Declaration] = []
        self.exports: Dict[str, Any] = {}

    def component(self, type_token: str, name: str, opts: Any = None) -> Component:
        comp = Component(type_token=type_token, name=name)
        self.components.append(comp)
        return comp

    def declare(
        self,
        kind: str,
        name: str,
        args: Mapping[str, Any],
        *,
        parent: Any,
    ) -> Declaration:
        if not isinstance(parent, Component) or parent not in self.components:
            raise ProvisioningError(f"등록되지 않은 parent 입니다: {name}")
        if self.get(name) is not None:
            raise ProvisioningError(f"이미 선언된 리소스 이름입니다: {name}")

        refs: List[str] = []
        _collect_refs(args, refs)
        declared = {d.name for d in self.declarations}
        unknown = [r for r in refs if r not in declared]
        if unknown:
            # 아직 선언되지 않은 리소스를 참조하는 전방 참조
            raise ProvisioningError(
                f"{name}: 선언되지 않은 리소스를 참조합니다: {', '.join(unknown)}"
            )

        decl = Declaration(
            kind=kind,
            name=name,
            args=dict(args),
            parent=parent.name,
            depends_on=tuple(refs),
        )
        self.declarations.append(decl)
        return decl

    def output(self, resource: Any, field_name: str) -> OutputRef:
        return OutputRef(resource=resource.name, field=field_name)

    def archive(self, path: str) -> Archive:
        return Archive(path=path)

    def export(self, name: str, value: Any) -> None:
        self.exports[name] = value

    def finish(self, component: Any, outputs: Mapping[str, Any]) -> None:
        component.outputs.update(outputs)

    def get(self, name: str) -> Optional[Declaration]:
        for d in self.declarations:
            if d.name == name:
                return d
        return None
