#!/usr/bin/env python3
"""Interactive operator console for the scheduling desk service."""

import sys

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

MENU = """
[bold]1[/bold] Register patient     [bold]2[/bold] Update patient     [bold]3[/bold] Delete patient
[bold]4[/bold] Add doctor           [bold]5[/bold] Add slot           [bold]6[/bold] Cancel slot
[bold]7[/bold] Book routine         [bold]8[/bold] Emergency in       [bold]9[/bold] Serve next
[bold]10[/bold] Undo                [bold]11[/bold] Reports           [bold]12[/bold] List tokens
[bold]13[/bold] Exit
"""


class DeskCLI:
    """Menu-driven console that drives the desk over HTTP."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        """Initialize desk CLI."""
        self.base_url = base_url
        self.console = Console()
        self.client = httpx.Client(base_url=base_url, timeout=10.0)
        self.actions = {
            1: self._register_patient,
            2: self._update_patient,
            3: self._delete_patient,
            4: self._add_doctor,
            5: self._add_slot,
            6: self._cancel_slot,
            7: self._book_routine,
            8: self._emergency_in,
            9: self._serve_next,
            10: self._undo,
            11: self._reports,
            12: self._list_tokens,
        }

    def start(self) -> None:
        """Start the interactive console."""
        self.console.print(
            Panel.fit("[bold blue]🏥 Triage Desk - Operator Console[/bold blue]", border_style="blue")
        )

        if not self._test_connection():
            self.console.print(f"[red]❌ Cannot connect to the desk service at {self.base_url}.[/red]")
            return

        try:
            while True:
                self.console.print(MENU)
                choice = IntPrompt.ask("[bold cyan]Choice[/bold cyan]")
                if choice == 13:
                    break
                action = self.actions.get(choice)
                if action is None:
                    self.console.print("[yellow]Unknown choice[/yellow]")
                    continue
                action()
        except KeyboardInterrupt:
            pass
        finally:
            self.console.print("\n[yellow]👋 Exiting.[/yellow]")
            self.client.close()

    def _test_connection(self) -> bool:
        """Test connection to the service."""
        try:
            response = self.client.get("/health")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response | None:
        """Send a request, printing API errors instead of raising."""
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            self.console.print(f"[red]❌ Connection error: {e}[/red]")
            return None

        if response.is_error:
            detail = response.json().get("detail", response.text) if response.content else response.text
            self.console.print(f"[red]❌ {response.status_code}: {detail}[/red]")
            return None
        return response

    def _register_patient(self) -> None:
        payload = {
            "id": IntPrompt.ask("ID"),
            "name": Prompt.ask("Name"),
            "age": IntPrompt.ask("Age"),
            "severity": IntPrompt.ask("Severity", default=0),
        }
        if self._request("POST", "/patients", json=payload):
            self.console.print(f"[green]Patient registered: {payload['id']}[/green]")

    def _update_patient(self) -> None:
        patient_id = IntPrompt.ask("ID")
        name = Prompt.ask("Name (or - to skip)", default="-")
        age = IntPrompt.ask("Age (or -1 to skip)", default=-1)
        severity = IntPrompt.ask("Severity (or -1 to skip)", default=-1)
        payload = {
            "name": None if name == "-" else name,
            "age": None if age == -1 else age,
            "severity": None if severity == -1 else severity,
        }
        if self._request("PATCH", f"/patients/{patient_id}", json=payload):
            self.console.print(f"[green]Patient updated: {patient_id}[/green]")

    def _delete_patient(self) -> None:
        patient_id = IntPrompt.ask("ID")
        if self._request("DELETE", f"/patients/{patient_id}"):
            self.console.print(f"[green]Patient deleted: {patient_id}[/green]")

    def _add_doctor(self) -> None:
        payload = {
            "id": IntPrompt.ask("Doctor ID"),
            "name": Prompt.ask("Name"),
            "specialization": Prompt.ask("Specialization"),
        }
        if self._request("POST", "/doctors", json=payload):
            self.console.print(f"[green]Doctor added: {payload['id']}[/green]")

    def _add_slot(self) -> None:
        doctor_id = IntPrompt.ask("Doctor ID")
        payload = {
            "slot_id": IntPrompt.ask("Slot ID"),
            "start": Prompt.ask("Start"),
            "end": Prompt.ask("End"),
        }
        if self._request("POST", f"/doctors/{doctor_id}/slots", json=payload):
            self.console.print(f"[green]Slot {payload['slot_id']} added to doctor {doctor_id}[/green]")

    def _cancel_slot(self) -> None:
        doctor_id = IntPrompt.ask("Doctor ID")
        slot_id = IntPrompt.ask("Slot ID")
        response = self._request("DELETE", f"/doctors/{doctor_id}/slots/{slot_id}")
        if response:
            if response.json()["cancelled"]:
                self.console.print(f"[green]Slot cancelled: {slot_id}[/green]")
            else:
                self.console.print("[yellow]Slot not found[/yellow]")

    def _book_routine(self) -> None:
        payload = {"patient_id": IntPrompt.ask("Patient ID"), "doctor_id": IntPrompt.ask("Doctor ID")}
        response = self._request("POST", "/bookings", json=payload)
        if response:
            token = response.json()
            label = f"slot {token['slot_id']}" if token["slot_id"] is not None else "walk-in"
            self.console.print(f"[green]Booked token {token['token_id']} ({label})[/green]")

    def _emergency_in(self) -> None:
        payload = {
            "patient_id": IntPrompt.ask("Patient ID"),
            "severity": IntPrompt.ask("Severity (lower is more urgent)"),
        }
        response = self._request("POST", "/triage", json=payload)
        if response:
            token = response.json()
            self.console.print(f"[green]Emergency inserted: token {token['token_id']}[/green]")

    def _serve_next(self) -> None:
        response = self._request("POST", "/serve")
        if not response:
            return
        result = response.json()
        if result["status"] == "served":
            self.console.print(
                f"[green]Served {result['kind']} patient {result['patient_id']} (token {result['token_id']})[/green]"
            )
        else:
            self.console.print("[yellow]No patients to serve.[/yellow]")

    def _undo(self) -> None:
        response = self._request("POST", "/undo")
        if not response:
            return
        result = response.json()
        colour = {"undone": "green", "unsupported": "red"}.get(result["status"], "yellow")
        self.console.print(f"[{colour}]{result['message']}[/{colour}]")

    def _reports(self) -> None:
        choice = IntPrompt.ask("1) Per-doctor  2) Summary  3) Top-K patients", choices=["1", "2", "3"])
        if choice == 1:
            self._doctor_report()
        elif choice == 2:
            self._summary_report()
        else:
            self._top_patients_report(IntPrompt.ask("K", default=3))

    def _doctor_report(self) -> None:
        response = self._request("GET", "/reports/doctors")
        if not response:
            return
        table = Table(title="Per-Doctor Report")
        for column in ("Doctor", "Name", "Specialization", "Pending", "Next free slot", "Served"):
            table.add_column(column)
        for row in response.json():
            slot = row["next_free_slot"]
            next_free = f"{slot['slot_id']}: {slot['start']}-{slot['end']}" if slot else "None"
            table.add_row(
                str(row["doctor_id"]),
                row["name"],
                row["specialization"],
                str(row["pending"]),
                next_free,
                str(row["served"]),
            )
        self.console.print(table)

    def _summary_report(self) -> None:
        response = self._request("GET", "/reports/summary")
        if response:
            data = response.json()
            self.console.print(
                f"Total served: {data['total_served']} | total pending: {data['total_pending']} "
                f"| emergency queued: {data['emergency_queued']}"
            )

    def _top_patients_report(self, k: int) -> None:
        response = self._request("GET", "/reports/top-patients", params={"k": k})
        if not response:
            return
        table = Table(title=f"Top {k} frequent patients")
        for column in ("#", "Patient", "Name", "Visits"):
            table.add_column(column)
        for rank, patient in enumerate(response.json(), start=1):
            table.add_row(str(rank), str(patient["id"]), patient["name"], str(patient["visits"]))
        self.console.print(table)

    def _list_tokens(self) -> None:
        response = self._request("GET", "/tokens")
        if not response:
            return
        table = Table(title="Active Tokens")
        for column in ("Token", "Patient", "Doctor", "Slot", "Kind"):
            table.add_column(column)
        for token in response.json():
            table.add_row(
                str(token["token_id"]),
                str(token["patient_id"]),
                str(token["doctor_id"] if token["doctor_id"] is not None else "-"),
                str(token["slot_id"] if token["slot_id"] is not None else "-"),
                token["kind"],
            )
        self.console.print(table)


def main():
    """Main entry point for the desk CLI."""
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

    cli = DeskCLI(base_url)
    cli.start()


if __name__ == "__main__":
    main()
