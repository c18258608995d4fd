"""
Example 01: Basic Mapping

This example maps a domain object graph, cycles and shared references
included, onto unrelated view classes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from graph_mapper import Mapper


@dataclass(eq=False)
class Address:
    street: str
    city: str


@dataclass(eq=False)
class Employee:
    name: str
    home: Address
    manager: Employee | None = None
    reports: list[Employee] = field(default_factory=list)


class AddressView:
    street: str | None = None
    city: str | None = None


class EmployeeView:
    name: str | None = None
    home: AddressView | None = None
    manager: EmployeeView | None = None
    reports: list[EmployeeView] | None = None


def main():
    office = Address("1 Infinite Loop", "Cupertino")
    boss = Employee("Grace", office)
    dev = Employee("Linus", office, manager=boss)
    boss.reports.append(dev)

    mapper = Mapper()

    print("=== Basic Mapping ===\n")

    view = mapper.map(boss, EmployeeView)
    print(f"Mapped {type(view).__name__}: {view.name}")
    print(f"Home: {view.home.street}, {view.home.city}")

    report = view.reports[0]
    print(f"Report: {report.name}, managed by {report.manager.name}")
    print(f"Cycle preserved: {report.manager is view}")
    print(f"Shared address preserved: {report.home is view.home}\n")

    # Collections mirror their source kind
    views = mapper.map([boss, dev], EmployeeView)
    print(f"List of {len(views)} views: {[v.name for v in views]}")


if __name__ == "__main__":
    main()
