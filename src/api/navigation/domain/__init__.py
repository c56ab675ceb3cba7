"""Navigation domain: menu entries, menu trees and route access rules."""
