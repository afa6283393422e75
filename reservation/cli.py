from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from reservation.bookings.schemas import Booking
from reservation.config import settings
from reservation.exceptions import PersistenceError
from reservation.logging_config import configure
from reservation.system import ReservationSystem

log = logging.getLogger("reservation.cli")

MENU_OPTIONS = [
    "Book Ticket",
    "Cancel Ticket",
    "Check Seat Availability",
    "Search Booking by PNR",
    "Search Booking by Name",
    "View All Bookings (Admin)",
    "View Train List",
    "System Statistics",
    "Exit & Save",
]
YES = ("y", "yes")


class ReservationConsole:
    """Text menu over the booking engine"""

    def __init__(
        self,
        system: ReservationSystem,
        console: Optional[Console] = None,
        input_func: Optional[Callable[[str], str]] = None,
    ):
        self.system = system
        self.console = console or Console()
        self._input = input_func or self.console.input
        self._actions = {
            1: self.book_ticket,
            2: self.cancel_ticket,
            3: self.check_seat_availability,
            4: self.search_by_pnr,
            5: self.search_by_name,
            6: self.view_all_bookings,
            7: self.display_train_list,
            8: self.display_statistics,
        }

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    # ---------- main loop ---------- #
    def run(self) -> None:
        self.console.rule(f"[bold]WELCOME TO {self.system.config.PROJECT_NAME.upper()}")
        while True:
            self.display_menu()
            try:
                raw = self.ask(f"Enter your choice (1-{len(MENU_OPTIONS)}): ")
            except EOFError:
                raw = str(len(MENU_OPTIONS))
            choice = int(raw) if raw.isdigit() else -1

            if choice == len(MENU_OPTIONS):
                if self.exit_system():
                    return
                continue

            action = self._actions.get(choice)
            if action is None:
                self.console.print("Invalid choice. Please try again.")
                continue
            action()

    def display_menu(self) -> None:
        self.console.rule("MAIN MENU")
        for number, label in enumerate(MENU_OPTIONS, start=1):
            self.console.print(f"{number}. {label}")

    # ---------- actions ---------- #
    def book_ticket(self) -> None:
        self.console.rule("BOOK TICKET")
        self.display_train_list()

        name = self.ask("Enter passenger name: ")
        age_raw = self.ask("Enter age: ")
        try:
            age = int(age_raw)
        except ValueError:
            self.console.print("Invalid age format. Please enter a valid number.")
            return
        gender = self.ask("Enter gender (M/F): ")
        train_number = self.ask("Enter train number: ")
        class_type = self.system.trains.match_class_type(
            self.ask(f"Enter class ({'/'.join(self.system.trains.valid_classes)}): ")
        )

        result = self.system.engine.book(name, age, gender, train_number, class_type)
        self.console.print(f"\n{result.message}", markup=False)
        if result.booking is not None:
            self.render_booking(result.booking)

    def cancel_ticket(self) -> None:
        self.console.rule("CANCEL TICKET")
        pnr = self.ask("Enter PNR number: ")

        lookup = self.system.engine.find(pnr)
        if not lookup.success:
            self.console.print(f"PNR not found: {lookup.message}", markup=False)
            return

        self.console.print("\nCurrent Booking Details:")
        self.render_booking(lookup.booking)
        confirmation = self.ask("Are you sure you want to cancel this booking? (Y/N): ")
        if confirmation.lower() not in YES:
            self.console.print("Cancellation aborted.")
            return

        result = self.system.engine.cancel(pnr)
        self.console.print(f"\n{result.message}", markup=False)
        if result.promoted_booking is not None:
            self.console.print("\nPromoted Passenger Details:")
            self.render_booking(result.promoted_booking)

    def check_seat_availability(self) -> None:
        self.console.rule("CHECK SEAT AVAILABILITY")
        self.display_train_list()

        train_number = self.ask("Enter train number: ")
        class_type = self.system.trains.match_class_type(
            self.ask(f"Enter class ({'/'.join(self.system.trains.valid_classes)}): ")
        )

        result = self.system.engine.check_availability(train_number, class_type)
        if not result.success:
            self.console.print(result.message, markup=False)
            return

        availability = result.availability
        table = Table(title="SEAT AVAILABILITY", show_header=False)
        table.add_row("Train", f"{result.train_name} ({result.train_number})")
        table.add_row("Class", result.class_type)
        table.add_row("Total Seats", str(availability.total_seats))
        table.add_row("Booked Seats", str(availability.booked_seats))
        table.add_row("Available Seats", str(availability.available_seats))
        table.add_row("Waitlist Count", str(availability.waitlist_count))
        self.console.print(table)

    def search_by_pnr(self) -> None:
        self.console.rule("SEARCH BY PNR")
        result = self.system.engine.find(self.ask("Enter PNR number: "))
        if not result.success:
            self.console.print(f"PNR not found: {result.message}", markup=False)
            return
        self.render_booking(result.booking)

    def search_by_name(self) -> None:
        self.console.rule("SEARCH BY NAME")
        name = self.ask("Enter passenger name (or part of name): ")
        matches = self.system.engine.search_by_name(name)
        if not matches:
            self.console.print(f"No bookings found for name: {name}", markup=False)
            return
        self.console.print(f"\nFound {len(matches)} booking(s):")
        for booking in matches:
            self.render_booking(booking)

    def view_all_bookings(self) -> None:
        self.console.rule("ALL BOOKINGS (ADMIN VIEW)")
        password = self.ask("Enter admin password: ")
        if not self.system.auth.verify(password):
            self.console.print("Access denied. Invalid admin password.")
            return

        bookings = self.system.engine.list_bookings(include_cancelled=True)
        if not bookings:
            self.console.print("No bookings found.")
            return
        self.render_booking_table(bookings)
        self.console.print(f"Summary: {self.system.engine.statistics().summary()}")

    def display_train_list(self) -> None:
        classes = self.system.trains.valid_classes
        table = Table(title="ALL TRAINS")
        table.add_column("Train No.")
        table.add_column("Train Name")
        for class_type in classes:
            table.add_column(f"{class_type} Seats")

        trains = self.system.engine.list_trains()
        if not trains:
            self.console.print("No trains available.")
            return
        for train in trains:
            cells = []
            for class_type in classes:
                if class_type in train.classes():
                    cells.append(f"{train.booked_seats(class_type)}/{train.total_seats(class_type)}")
                else:
                    cells.append("-")
            table.add_row(train.train_number, train.train_name, *cells)
        self.console.print(table)

    def display_statistics(self) -> None:
        self.console.rule("SYSTEM STATISTICS")
        self.console.print(self.system.engine.statistics().summary())
        self.console.print(f"Total Trains: {len(self.system.trains)}")
        self.console.print(self.system.persistence.file_info().describe())

    def exit_system(self) -> bool:
        """Save and report whether the menu should close"""
        self.console.print("\nSaving data and exiting...")
        try:
            self.system.save()
        except PersistenceError as e:
            self.console.print(f"Error saving data: {e.message}", markup=False)
            try:
                response = self.ask("Continue exiting without saving? (Y/N): ")
            except EOFError:
                return True
            return response.lower() in YES

        self.console.print(f"Thank you for using {self.system.config.PROJECT_NAME}!")
        return True

    # ---------- rendering ---------- #
    def render_booking(self, booking: Booking) -> None:
        table = Table(title="BOOKING DETAILS", show_header=False)
        table.add_row("PNR", booking.pnr)
        table.add_row("Passenger Name", booking.name)
        table.add_row("Age", str(booking.age))
        table.add_row("Gender", booking.gender)
        table.add_row("Train Number", booking.train_number)
        table.add_row("Class", booking.class_type)
        table.add_row("Seat Number", booking.seat_number or "Not Assigned")
        table.add_row("Status", booking.status.value.upper())
        self.console.print(table)

    def render_booking_table(self, bookings: List[Booking]) -> None:
        table = Table(title="ALL BOOKINGS")
        for column in ("PNR", "Name", "Train", "Class", "Seat", "Status", "Age", "Gender"):
            table.add_column(column)
        for booking in bookings:
            name = booking.name if len(booking.name) <= 20 else booking.name[:17] + "..."
            table.add_row(
                booking.pnr,
                name,
                booking.train_number,
                booking.class_type,
                booking.seat_number or "N/A",
                booking.status.value.upper(),
                str(booking.age),
                booking.gender,
            )
        self.console.print(table)


# ---------- main ---------- #
def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Railway reservation console")
    parser.add_argument("--data-file", type=Path, help="SQLite file used for save/load")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
    parser.add_argument("--no-load", action="store_true", help="Start from the default trains")
    parser.add_argument("--serve", action="store_true", help="Serve the HTTP API instead of the menu")
    parser.add_argument("--host", default="127.0.0.1", help="API host (with --serve)")
    parser.add_argument("--port", type=int, default=8000, help="API port (with --serve)")
    args = parser.parse_args(argv)

    configure(args.log_level)

    system = ReservationSystem(data_file=args.data_file)
    if not args.no_load:
        system.load()
    log.info("Data file → %s", system.persistence.data_file)

    if args.serve:
        import uvicorn
        from reservation.main import create_app

        uvicorn.run(create_app(system), host=args.host, port=args.port)
        return

    ReservationConsole(system).run()
