#!/usr/bin/env python3
"""
Socket.IO console client for the chess relay server.

This client connects to the relay server and lets two people play from the
command line.  The server only enforces turn order, so moves are sent as
typed.

Usage:
    python socketio_client.py http://localhost:3001

Commands:
    create - Create a new game (you play white)
    join <game_id> - Join an existing game (you play black)
    move <piece> <move> [position] - Send a move, e.g. "move wP e4"
    over <result> - End the current game with the given result
    list - List active games
    status - Show the current game
    exit - Exit the program
"""

import sys
from typing import Any, List, Optional

import requests
import socketio


class ChessRelayClient:
    """Socket.IO client for the chess relay server."""

    def __init__(self, server_url: str):
        self.server_url = server_url.rstrip('/')
        self.sio = socketio.Client()
        self.game_id: Optional[str] = None
        self.color: Optional[str] = None
        self.turn: Optional[str] = None
        self.position: Any = None
        self.moves_list: List[List[str]] = []
        self.setup_socketio_handlers()

    def setup_socketio_handlers(self):
        """Set up Socket.IO event handlers."""

        @self.sio.on('gameCreated')
        def on_game_created(data):
            self.game_id = data['gameId']
            self.color = data['color']
            self.turn = 'w'
            self.moves_list = []
            print(f"✓ Game created! Game ID: {self.game_id} (share it with your opponent)")

        @self.sio.on('gameStarted')
        def on_game_started(data):
            self.game_id = data['gameId']
            self.turn = data['turn']
            print(f"♟ Game {self.game_id} started, {self._color_name(self.turn)} to move")

        @self.sio.on('playerColor')
        def on_player_color(data):
            self.color = data['color']
            print(f"✓ You play {self._color_name(self.color)}")

        @self.sio.on('moveMade')
        def on_move_made(data):
            self.turn = data['turn']
            self.position = data['newPosition']
            self.moves_list = data['movesList']
            print(f"\n→ {data['piece']} {data['newMove']} (move {data['moveNumber']})")
            self.display_moves()
            if self.turn == self.color:
                print("Your move.")

        @self.sio.on('gameEnded')
        def on_game_ended(data):
            print(f"\n🏁 Game over: {data['result']}")

        @self.sio.on('playerDisconnected')
        def on_player_disconnected(data):
            print(f"\n📴 {self._color_name(data['color'])} disconnected, game closed")
            self.game_id = None

        @self.sio.on('gameError')
        def on_game_error(data):
            print(f"\n✗ {data.get('message', 'Unknown error')}")

        @self.sio.on('connect')
        def on_connect():
            print("🔌 Socket.IO connected")

        @self.sio.on('disconnect')
        def on_disconnect():
            print("🔌 Socket.IO disconnected")

    @staticmethod
    def _color_name(color: Optional[str]) -> str:
        return {'w': 'white', 'b': 'black'}.get(color, 'unknown')

    def connect(self) -> bool:
        """Connect to the Socket.IO server."""
        try:
            self.sio.connect(self.server_url)
            return True
        except socketio.exceptions.ConnectionError as e:
            print(f"✗ Socket.IO connection failed: {e}")
            return False

    def display_moves(self):
        """Print the move list in numbered pairs."""
        for number, (white_move, black_move) in enumerate(self.moves_list, start=1):
            print(f"  {number}. {white_move} {black_move}".rstrip())

    def list_games(self):
        """List active games via the HTTP API."""
        try:
            response = requests.get(f"{self.server_url}/api/games")
            result = response.json()
        except requests.exceptions.RequestException as e:
            print(f"✗ List games error: {e}")
            return

        games = result['data']['games']
        if not games:
            print("No active games")
            return
        for game in games:
            print(f"  {game['game_id']}  {game['status']:<8}  players: {len(game['players'])}")

    def handle_command(self, line: str) -> bool:
        """Run one command.  Returns False when the client should exit."""
        parts = line.split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command == 'exit':
            return False
        elif command == 'create':
            self.sio.emit('createGame')
        elif command == 'join' and len(args) == 1:
            self.sio.emit('joinGame', args[0])
        elif command == 'move' and len(args) >= 2:
            if not self.game_id:
                print("✗ Not in a game")
                return True
            position = ' '.join(args[2:]) or None
            self.sio.emit('moveMade', {
                'gameId': self.game_id,
                'newPosition': position,
                'newMove': args[1],
                'piece': args[0]
            })
        elif command == 'over' and args:
            if not self.game_id:
                print("✗ Not in a game")
                return True
            self.sio.emit('gameOver', {'gameId': self.game_id, 'result': ' '.join(args)})
        elif command == 'list':
            self.list_games()
        elif command == 'status':
            if not self.game_id:
                print("Not in a game")
            else:
                print(f"Game {self.game_id}: you are {self._color_name(self.color)}, "
                      f"{self._color_name(self.turn)} to move")
                self.display_moves()
        else:
            print(__doc__.split('Commands:')[1])
        return True

    def run(self):
        """Main command loop."""
        if not self.connect():
            return
        try:
            while True:
                try:
                    line = input('> ')
                except EOFError:
                    break
                if not self.handle_command(line.strip()):
                    break
        except KeyboardInterrupt:
            print()
        finally:
            self.sio.disconnect()


def main():
    if len(sys.argv) != 2:
        print("Usage: python socketio_client.py <server_url>")
        print("Example: python socketio_client.py http://localhost:3001")
        sys.exit(1)

    ChessRelayClient(sys.argv[1]).run()


if __name__ == '__main__':
    main()
