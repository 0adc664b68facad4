import abc
from typing import List
from .model import Launcher


class LauncherResolverInterface(abc.ABC):
    """ Decides which executable establishes the tunnel """

    @abc.abstractmethod
    def resolve(self) -> Launcher:
        pass


class ServiceManagerInterface(abc.ABC):
    """ External supervisor that runs a tunnel as a service unit """

    @abc.abstractmethod
    def unit_name(self, tunnel_name: str) -> str:
        pass

    @abc.abstractmethod
    def control(self, action: str, tunnel_name: str) -> int:
        pass

    @abc.abstractmethod
    def tail_log(self, tunnel_name: str) -> int:
        pass

    @abc.abstractmethod
    def list_active(self) -> List[str]:
        pass
