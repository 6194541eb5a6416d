"""Application state: text input, pickers, diff search, pending loads, modals and the App object."""